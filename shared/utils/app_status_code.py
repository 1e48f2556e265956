class AppStatusCode:
    OPERATION_SUCCESS = "100"
    DATA_RETRIEVED_SUCCESSFULLY = "101"

    INVALID_INPUT = "200"
    DUPLICATE_ADD_ERROR = "202"

    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_USER_INVALID = "302"
    AUTHENTICATION_USER_INACTIVE = "303"
    AUTHENTICATION_USER_OTP_INVALID = "304"
    AUTHENTICATION_USER_ALREADY_CONFIRMED = "305"
    AUTHENTICATION_COMPANY_INVALID = "306"

    OPERATION_FAILED = "400"
    OPERATION_ERROR = "401"
    EMAIL_DISPATCH_FAILED = "402"
