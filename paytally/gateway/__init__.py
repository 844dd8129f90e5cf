"""paytally.gateway: inbound row parsing and CSV transport."""

from paytally.gateway.csv_io import read_records as read_records
from paytally.gateway.csv_io import write_snapshots as write_snapshots
from paytally.gateway.parser import parse_record as parse_record
