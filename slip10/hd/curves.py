#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP10 curves.

A SLIP10Curve binds an elliptic curve of prime order to the HMAC key
used to derive the master key from the seed.
It is the only curve capability the derivation engine relies on:
scalar validity, scalar/point fixed-width encodings,
generator multiplication, and point addition.
The arithmetic itself is provided by btclib.ec.

The HMAC keys are the ones published in the SLIP10 registry
https://github.com/satoshilabs/slips/blob/master/slip-0010.md:
any other value would derive keys that are internally consistent
but not interoperable with other SLIP10 implementations.
"""

from typing import Any, Dict, Union

from btclib.alias import Octets, Point
from btclib.ec import Curve, bytes_from_point, mult, point_from_octets, secp256k1
from btclib.ec.curve import CURVES as EC_CURVES

from slip10.exceptions import SLIP10TypeError, SLIP10ValueError

# SLIP10 serializes private keys and I_L as 256-bit big-endian integers
SCALAR_SIZE = 32


class SLIP10Curve:
    "Elliptic curve of prime order with its SLIP10 master key HMAC key."

    __slots__ = ("name", "ec", "seed_key")

    def __init__(self, name: str, ec: Curve, seed_key: bytes) -> None:
        if not isinstance(ec, Curve):
            raise SLIP10TypeError(f"not a Curve: {type(ec).__name__}")
        if ec.n.bit_length() > SCALAR_SIZE * 8:
            raise SLIP10ValueError(f"curve order too large: {ec.n.bit_length()} bits")
        if not seed_key:
            raise SLIP10ValueError("empty seed key")
        self.name = name
        self.ec = ec
        self.seed_key = seed_key

    def __repr__(self) -> str:
        return f"SLIP10Curve('{self.name}')"

    # curves are immutable: dataclasses_json deep-copies field values
    def __copy__(self) -> "SLIP10Curve":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "SLIP10Curve":
        return self

    @property
    def n(self) -> int:
        return self.ec.n

    def is_valid_scalar(self, q: int) -> bool:
        return 0 < q < self.ec.n

    def mult(self, q: int) -> Point:
        "Return q*G."
        return mult(q, self.ec.G, self.ec)

    def add(self, Q1: Point, Q2: Point) -> Point:
        return self.ec.add(Q1, Q2)

    def bytes_from_scalar(self, q: int) -> bytes:
        return q.to_bytes(SCALAR_SIZE, byteorder="big", signed=False)

    def bytes_from_point(self, Q: Point) -> bytes:
        "Return the SEC compressed representation of the point."
        return bytes_from_point(Q, self.ec)

    def point_from_bytes(self, pub_key: Octets) -> Point:
        return point_from_octets(pub_key, self.ec)

    @property
    def point_size(self) -> int:
        "Size of the SEC compressed representation of a point."
        return self.ec.p_size + 1


SECP256K1 = SLIP10Curve("secp256k1", secp256k1, b"Bitcoin seed")
NIST256P1 = SLIP10Curve("nist256p1", EC_CURVES["secp256r1"], b"Nist256p1 seed")

CURVES: Dict[str, SLIP10Curve] = {
    "secp256k1": SECP256K1,
    "bitcoin": SECP256K1,
    "nist256p1": NIST256P1,
    "secp256r1": NIST256P1,
    "nist p-256": NIST256P1,
    "p-256": NIST256P1,
}

# SLIP10 curves with a different derivation scheme
_UNSUPPORTED = ("ed25519", "curve25519")


def curve_from_name(curve: Union[SLIP10Curve, str]) -> SLIP10Curve:
    """Return the SLIP10Curve with the given (case insensitive) name.

    A SLIP10Curve is returned untouched.
    """

    if isinstance(curve, SLIP10Curve):
        return curve
    if not isinstance(curve, str):
        raise SLIP10TypeError(f"not a curve name: {curve!r}")

    key = curve.strip().lower()
    if key in _UNSUPPORTED:
        err_msg = f"unsupported curve: {curve} "
        err_msg += "(its SLIP10 derivation scheme is hardened-only and not implemented)"
        raise SLIP10ValueError(err_msg)
    try:
        return CURVES[key]
    except KeyError as e:
        raise SLIP10ValueError(f"unknown curve: {curve}") from e
