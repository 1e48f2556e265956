import secrets
import string


def generate_otp(length=4):
    """Generate a numeric one-time code of exactly `length` digits."""
    if length < 1:
        length = 1

    # Leading digit is never zero so the code keeps its length as a number
    otp_chars = [secrets.choice("123456789")]
    otp_chars.extend(secrets.choice(string.digits) for _ in range(length - 1))

    return ''.join(otp_chars)
