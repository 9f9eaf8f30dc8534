import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import csvcut without installing it
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def six_fields():
    """Return the row used by the ordering/duplication examples."""
    return ["0", "1", "2", "3", "4", "5"]


@pytest.fixture
def abcd_csv():
    """Header a,b,c,d followed by two data rows."""
    return "a,b,c,d\n1,2,3,4\n11,12,13,14\n"


@pytest.fixture
def abc_csv():
    """Header a,b,c followed by two data rows."""
    return "a,b,c\n2,3,4\n11,12,13\n"
