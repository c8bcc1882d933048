#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module slip10.hd."""

from slip10.hd.curves import CURVES, NIST256P1, SECP256K1, SLIP10Curve, curve_from_name
from slip10.hd.der_path import (
    H,
    DerPath,
    hardened,
    indexes_from_der_path,
    int_from_index_str,
    str_from_der_path,
    str_from_index_int,
)
from slip10.hd.derivation import (
    DerivedShift,
    derive_child_key,
    derive_child_key_path,
    derive_child_public_key,
    derive_master_key,
    derive_shift,
)
from slip10.hd.keys import (
    ExtendedKey,
    ExtendedKeyPair,
    ExtendedPublicKey,
    ExtendedSecretKey,
)

__all__ = [
    "CURVES",
    "NIST256P1",
    "SECP256K1",
    "SLIP10Curve",
    "curve_from_name",
    "H",
    "DerPath",
    "hardened",
    "indexes_from_der_path",
    "int_from_index_str",
    "str_from_der_path",
    "str_from_index_int",
    "derive_child_key",
    "derive_child_key_path",
    "derive_child_public_key",
    "derive_master_key",
    "derive_shift",
    "DerivedShift",
    "ExtendedKey",
    "ExtendedKeyPair",
    "ExtendedPublicKey",
    "ExtendedSecretKey",
]
