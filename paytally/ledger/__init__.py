"""paytally.ledger: accounts, transaction records and the ledger state machine."""

from paytally.ledger.account import Account as Account
from paytally.ledger.account import AccountSnapshot as AccountSnapshot
from paytally.ledger.engine import Ledger as Ledger
from paytally.ledger.transactions import AnyTransaction as AnyTransaction
from paytally.ledger.transactions import ApplyOutcome as ApplyOutcome
from paytally.ledger.transactions import Chargeback as Chargeback
from paytally.ledger.transactions import Deposit as Deposit
from paytally.ledger.transactions import Dispute as Dispute
from paytally.ledger.transactions import FundsMovement as FundsMovement
from paytally.ledger.transactions import Resolve as Resolve
from paytally.ledger.transactions import TransactionKind as TransactionKind
from paytally.ledger.transactions import TransactionRecord as TransactionRecord
from paytally.ledger.transactions import Withdrawal as Withdrawal
from paytally.ledger.transactions import create_record as create_record
