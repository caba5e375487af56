import pytest

from seqcomplete import flagdebug


@pytest.fixture(autouse=True)
def clear_debugflags():
    flagdebug.DEBUGFLAGS.clear()
    yield
    flagdebug.DEBUGFLAGS.clear()
