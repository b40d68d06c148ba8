# reads and writes the pipe-delimited data files, helpers internal to store package
import os.path
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from store.errors import StoreError
from utils.logger import get_logger

_logger = get_logger(__name__)

SELLERS_FILE = "sellers.txt"
CUSTOMERS_FILE = "customers.txt"
PRODUCTS_FILE = "products.txt"
CARTS_FILE = "carts.txt"

DELIMITER = "|"

# minimum field count of each record kind, shorter lines are skipped
SELLER_FIELDS = 3  # id|name|email
CUSTOMER_FIELDS = 5  # id|name|address|phone|email
PRODUCT_FIELDS = 8  # id|name|price|category|quantity|sellerId|ratingSum|ratingCount
CART_FIELDS = 3  # customerId|productId|quantity

T = TypeVar("T")


def fmt_number(val: float | int) -> str:
    """`10.0` is written as `10`, anything else as its shortest repr."""
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return repr(val) if isinstance(val, float) else str(val)


def read_records(path: str, min_fields: int) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line number, fields) for every record in `path`.
    A missing file yields nothing. Records with too few fields are skipped.
    """
    if not os.path.exists(path):
        _logger.debug(f"{path} does not exist yet, nothing to load")
        return
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            # only "\n" ends a record, str.splitlines also breaks on "\u2028" and friends
            lines = [line.removesuffix("\r") for line in f.read().split("\n")]
    except OSError as e:
        raise StoreError(f"cannot read data file: {e}", path) from e

    for line_no, line in enumerate(lines, start=1):
        fields = line.split(DELIMITER)
        if len(fields) < min_fields:
            if line.strip():
                _logger.warning(f"{path}:{line_no}: skipping short record {line!r}")
            continue
        yield line_no, fields


def write_records(path: str, rows: Iterable[Sequence[object]]) -> None:
    """Overwrite `path` with one delimited line per row. Not atomic."""
    lines = [
        DELIMITER.join(
            fmt_number(v) if isinstance(v, (int, float)) else str(v) for v in row
        )
        for row in rows
    ]
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        raise StoreError(f"cannot write data file: {e}", path) from e


def convert(
    conv: Callable[[str], T], raw: str, what: str, path: str, line_no: int
) -> T:
    try:
        return conv(raw.strip())
    except ValueError as e:
        raise StoreError(f"{what} is not a number: {raw!r}", path, line_no) from e
