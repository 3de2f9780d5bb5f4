"""
Constants and exit codes for sfds-status.
"""

DEFAULT_SERVER_URL = 'https://localhost:7777'
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = 'WARNING'

API_PATH = '/api/v1'


class ExitCodes:
    """Process exit codes reported by the probe."""
    PLAYERS_ONLINE = 0
    NO_PLAYERS_ONLINE = 1
    ERROR = 2


class ApiFunctions:
    """Management API function names."""
    PASSWORD_LOGIN = 'PasswordLogin'
    QUERY_SERVER_STATE = 'QueryServerState'
    GET_SERVER_OPTIONS = 'GetServerOptions'
    GET_ADVANCED_GAME_SETTINGS = 'GetAdvancedGameSettings'


class ApiErrorCodes:
    """Error codes returned in the API error envelope."""
    WRONG_PASSWORD = 'wrong_password'


ADMIN_PRIVILEGE_LEVEL = 'Administrator'

# Key rewriting for the dynamic part of the status record
SERVER_OPTION_PREFIX = 'FG.'
ADVANCED_SETTING_PREFIXES = ('FG.GameRules.', 'FG.PlayerRules.')
CONFIG_FIELD_PREFIX = 'Config_'
SETTING_FIELD_PREFIX = 'Setting_'

GAME_PHASE_PREFIX = 'GP_'

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
