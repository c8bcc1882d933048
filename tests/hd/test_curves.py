#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10.hd.curves` module."

import copy

import pytest
from btclib.alias import INF
from btclib.ec import Curve, secp256k1
from btclib.ec.curve import CURVES as EC_CURVES

from slip10.exceptions import SLIP10TypeError, SLIP10ValueError
from slip10.hd.curves import (
    CURVES,
    NIST256P1,
    SECP256K1,
    SLIP10Curve,
    curve_from_name,
)


def test_registry() -> None:
    assert SECP256K1.ec is secp256k1
    assert SECP256K1.seed_key == b"Bitcoin seed"
    assert NIST256P1.ec is EC_CURVES["secp256r1"]
    assert NIST256P1.seed_key == b"Nist256p1 seed"

    for name in ("secp256k1", "bitcoin"):
        assert CURVES[name] is SECP256K1
    for name in ("nist256p1", "secp256r1", "nist p-256", "p-256"):
        assert CURVES[name] is NIST256P1


def test_curve_from_name() -> None:
    assert curve_from_name("secp256k1") is SECP256K1
    assert curve_from_name(" SECP256K1 ") is SECP256K1
    assert curve_from_name("NIST P-256") is NIST256P1
    assert curve_from_name("Nist256p1") is NIST256P1
    assert curve_from_name(NIST256P1) is NIST256P1

    for name in ("ed25519", "Ed25519", "curve25519"):
        with pytest.raises(SLIP10ValueError, match="unsupported curve: "):
            curve_from_name(name)

    with pytest.raises(SLIP10ValueError, match="unknown curve: "):
        curve_from_name("secp384r1")

    with pytest.raises(SLIP10TypeError, match="not a curve name: "):
        curve_from_name(secp256k1)  # type: ignore


def test_slip10_curve() -> None:
    for curve in (SECP256K1, NIST256P1):
        assert curve.n == curve.ec.n
        assert curve.point_size == 33

        assert not curve.is_valid_scalar(0)
        assert curve.is_valid_scalar(1)
        assert curve.is_valid_scalar(curve.n - 1)
        assert not curve.is_valid_scalar(curve.n)

        assert curve.mult(1) == curve.ec.G
        G2 = curve.mult(2)
        assert curve.add(curve.ec.G, curve.ec.G) == G2
        assert curve.add(curve.mult(curve.n - 1), curve.ec.G) == INF

        assert curve.bytes_from_scalar(1) == b"\x00" * 31 + b"\x01"
        assert len(curve.bytes_from_scalar(curve.n - 1)) == 32

        G_bytes = curve.bytes_from_point(curve.ec.G)
        assert len(G_bytes) == 33
        assert curve.point_from_bytes(G_bytes) == curve.ec.G
        assert curve.point_from_bytes(G_bytes.hex()) == curve.ec.G

        # immutable: copies are the object itself
        assert copy.copy(curve) is curve
        assert copy.deepcopy(curve) is curve

    assert repr(SECP256K1) == "SLIP10Curve('secp256k1')"


def test_slip10_curve_exceptions() -> None:
    with pytest.raises(SLIP10TypeError, match="not a Curve: "):
        SLIP10Curve("secp256k1", "secp256k1", b"Bitcoin seed")  # type: ignore

    with pytest.raises(SLIP10ValueError, match="empty seed key"):
        SLIP10Curve("secp256k1", secp256k1, b"")

    # a 257-bit group order does not fit a 32 bytes scalar
    ec = Curve.__new__(Curve)
    ec.n = 2**257 - 93
    with pytest.raises(SLIP10ValueError, match="curve order too large: "):
        SLIP10Curve("too large", ec, b"seed")


def test_custom_curve() -> None:
    ec13_19 = Curve(13, 0, 2, (1, 9), 19, 1, False)
    curve = SLIP10Curve("ec13_19", ec13_19, b"ec13_19 seed")
    assert curve.n == 19
    assert curve.mult(19) == INF
    assert curve.point_size == 2
