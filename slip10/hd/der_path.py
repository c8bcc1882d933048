#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP10 derivation index and derivation path.

A derivation index is a 32-bit unsigned int:
indexes with the most significant bit set (i.e. >= H)
require hardened (secret key only) derivation.

A derivation path, ordered from the root to the leaf,
can be represented as:

- "m/44h/0'/1H/0/10" or "44h/0'/1H/0/10" string
- sequence of integer indexes
- one single integer index
"""

from typing import List, Sequence, Union

from slip10.exceptions import IndexOutOfRange, SLIP10ValueError

# first hardened index
H = 0x80000000
MAX_INDEX = 0xFFFFFFFF

# default hardening symbol among the possible ones: "h", "H", "'"
_HARDENING = "'"


def hardened(i: int) -> int:
    "Return the hardened index H + i, with i in 0..H-1."

    if not 0 <= i < H:
        raise IndexOutOfRange(f"invalid index to be hardened: {hex(i)}")
    return H + i


def is_hardened(index: int) -> bool:
    return index >= H


def assert_valid_index(index: int) -> None:
    if not isinstance(index, int) or isinstance(index, bool):
        raise IndexOutOfRange(f"not an int index: {index!r}")
    if not 0 <= index <= MAX_INDEX:
        raise IndexOutOfRange(f"index not in 0..0xFFFFFFFF: {hex(index)}")


def int_from_index_str(s: str) -> int:

    s = s.strip().lower()
    is_hardened_ = False
    if s and s[-1] in ("'", "h"):
        s = s[:-1].strip()
        is_hardened_ = True

    try:
        index = int(s)
    except ValueError as e:
        raise SLIP10ValueError(f"invalid index: '{s}'") from e
    if not 0 <= index < H:
        raise IndexOutOfRange(f"invalid index: {index}")
    return index + (H if is_hardened_ else 0)


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:

    if hardening not in ("'", "h", "H"):
        raise SLIP10ValueError(f"invalid hardening symbol: {hardening}")
    assert_valid_index(i)
    if i < H:
        return str(i)
    return str(i - H) + hardening


def _indexes_from_der_path_str(der_path: str, skip_m: bool = True) -> List[int]:

    steps = [x.strip().lower() for x in der_path.split("/")]
    if skip_m and steps[0] == "m":
        steps = steps[1:]

    return [int_from_index_str(s) for s in steps if s != ""]


DerPath = Union[str, Sequence[int], int]


def indexes_from_der_path(der_path: DerPath) -> List[int]:
    """Return the list of integer indexes of a derivation path.

    The path string is case/blank/extra-slash insensitive
    (e.g. "M /44h / 0' /1H // 0/ 10 / ").
    """

    if isinstance(der_path, str):
        return _indexes_from_der_path_str(der_path)

    if isinstance(der_path, int):
        indexes = [der_path]
    else:
        indexes = list(der_path)

    for index in indexes:
        assert_valid_index(index)
    return indexes


def str_from_der_path(der_path: DerPath, hardening: str = _HARDENING) -> str:
    indexes = indexes_from_der_path(der_path)
    result = "/".join(str_from_index_int(i, hardening) for i in indexes)
    return "m" + ("/" + result if result else "")
