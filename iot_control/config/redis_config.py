"""
Cấu hình cho Redis.
"""

# Tiền tố khóa
KEY_PREFIXES = {
    "session": "session:"
}
