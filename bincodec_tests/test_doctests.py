import doctest
import importlib

import pytest
from structlog.testing import capture_logs

MODULES_WITH_DOCTESTS = [
    'bincodec.api',
    'bincodec.codecs.dataclass_codec',
    'bincodec.codecs.enum_codec',
    'bincodec.codecs.fixed_size_bytes_codec',
    'bincodec.codecs.union_codec',
    'bincodec.codecs.utils',
    'bincodec.derive',
    'bincodec.serialization.compound_encoding.array',
    'bincodec.serialization.compound_encoding.collection',
    'bincodec.serialization.compound_encoding.mapping',
    'bincodec.serialization.compound_encoding.optional',
    'bincodec.serialization.compound_encoding.tagged',
    'bincodec.serialization.compound_encoding.tuple',
    'bincodec.serialization.encoding.bool',
    'bincodec.serialization.encoding.bytes',
    'bincodec.serialization.encoding.char',
    'bincodec.serialization.encoding.float',
    'bincodec.serialization.encoding.int',
    'bincodec.serialization.encoding.length',
    'bincodec.serialization.encoding.utf8',
    'bincodec.types',
    'bincodec.utils.result',
    'bincodec.utils.typing',
]


@pytest.mark.parametrize('module_name', MODULES_WITH_DOCTESTS)
def test_doctests(module_name: str) -> None:
    module = importlib.import_module(module_name)
    # keep derivation logs out of the doctest output
    with capture_logs():
        failures, _ = doctest.testmod(module)
    assert failures == 0
