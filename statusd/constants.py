"""Error codes and Redis key prefixes shared by the status server."""

from enum import IntEnum


class ErrorCodes(IntEnum):
    """Result codes carried in RPC and HTTP replies."""

    SUCCESS = 0
    ERROR_JSON = 1001
    RPC_FAILED = 1002
    VARIFY_EXPIRED = 1003
    VARIFY_CODE_ERR = 1004
    USER_EXIST = 1005
    PASSWD_ERR = 1006
    EMAIL_NOT_MATCH = 1007
    PASSWD_UP_FAILED = 1008
    PASSWD_INVALID = 1009
    TOKEN_INVALID = 1010
    UID_INVALID = 1011


USER_IP_PREFIX = "uip_"
USER_TOKEN_PREFIX = "utoken_"
IP_COUNT_PREFIX = "ipcount_"
USER_BASE_INFO = "ubaseinfo_"
LOGIN_COUNT = "logincount"
NAME_INFO = "nameinfo_"
CODE_PREFIX = "code_"