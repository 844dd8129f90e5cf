"""paytally.core: result values, error values and decimal helpers."""

from paytally.core.errors import ConfigError as ConfigError
from paytally.core.errors import FieldViolation as FieldViolation
from paytally.core.errors import FundsError as FundsError
from paytally.core.errors import FundsErrorReason as FundsErrorReason
from paytally.core.errors import LedgerLookupError as LedgerLookupError
from paytally.core.errors import LookupErrorReason as LookupErrorReason
from paytally.core.errors import PaytallyError as PaytallyError
from paytally.core.errors import ValidationError as ValidationError
from paytally.core.money import DISPLAY_PLACES as DISPLAY_PLACES
from paytally.core.money import PAYTALLY_DECIMAL_CONTEXT as PAYTALLY_DECIMAL_CONTEXT
from paytally.core.money import MAX_AMOUNT as MAX_AMOUNT
from paytally.core.money import NonNegativeDecimal as NonNegativeDecimal
from paytally.core.money import to_display as to_display
from paytally.core.result import Err as Err
from paytally.core.result import Ok as Ok
from paytally.core.result import Result as Result
from paytally.core.result import unwrap as unwrap
