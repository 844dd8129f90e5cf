"""paytally.infra: runtime configuration."""

from paytally.infra.config import ENV_ERROR_POLICY as ENV_ERROR_POLICY
from paytally.infra.config import ENV_LOG_LEVEL as ENV_LOG_LEVEL
from paytally.infra.config import EngineConfig as EngineConfig
from paytally.infra.config import ErrorPolicy as ErrorPolicy
from paytally.infra.config import load_config as load_config
from paytally.infra.config import parse_error_policy as parse_error_policy
from paytally.infra.config import parse_log_level as parse_log_level
