# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from bincodec.api import decode, encode, from_bytes, parse, to_bytes, unparse
from bincodec.codecs import Codec, make_codec
from bincodec.derive import binary
from bincodec.utils.result import Err, Ok, Result
from bincodec.version import __version__

__all__ = [
    'Codec',
    'Err',
    'Ok',
    'Result',
    '__version__',
    'binary',
    'decode',
    'encode',
    'from_bytes',
    'make_codec',
    'parse',
    'to_bytes',
    'unparse',
]
