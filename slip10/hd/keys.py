#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP10 extended keys.

An extended key is a key augmented with a 32 bytes chain code,
the extra entropy that makes child key derivation possible.

- ExtendedSecretKey: secret scalar and chain code
- ExtendedPublicKey: public point and chain code
- ExtendedKeyPair: an ExtendedSecretKey together with its public point,
  computed once at construction time

The serialized extended key is:

- [  :32] big-endian secret scalar or [  :33] compressed public point
- [-32:  ] chain code

The curve is not serialized: it must be provided when parsing.
The JSON representation includes the curve name instead:
a curve which is not in the registry must be provided when decoding.

Secret scalars are Python ints, whose memory cannot be wiped:
they are at least kept out of repr() and of the logs.
"""

import json
from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from btclib.alias import INF, Octets, Point
from btclib.utils import bytes_from_octets, int_from_integer
from dataclasses_json import DataClassJsonMixin, config

from slip10.exceptions import SLIP10TypeError, SLIP10ValueError
from slip10.hd.curves import SCALAR_SIZE, SECP256K1, SLIP10Curve, curve_from_name

CHAIN_CODE_SIZE = 32


def _encode_point(Q: Sequence[int]) -> List[str]:
    return [hex(Q[0]), hex(Q[1])]


def _decode_point(Q: Sequence[str]) -> Point:
    return int_from_integer(Q[0]), int_from_integer(Q[1])


def _assert_valid_chain_code(chain_code: bytes) -> None:
    if len(chain_code) != CHAIN_CODE_SIZE:
        err_msg = f"invalid chain code length: {len(chain_code)} bytes"
        err_msg += f" instead of {CHAIN_CODE_SIZE}"
        raise SLIP10ValueError(err_msg)


def _assert_valid_curve(curve: SLIP10Curve) -> None:
    if not isinstance(curve, SLIP10Curve):
        raise SLIP10TypeError(f"not a SLIP10Curve: {type(curve).__name__}")


_CurveJson = TypeVar("_CurveJson", bound="_CurveJsonMixin")


class _CurveJsonMixin(DataClassJsonMixin):
    "DataClassJsonMixin with the curve as optional decoding argument."

    @classmethod
    def from_dict(
        cls: Type[_CurveJson],
        kvs: Dict[str, Any],
        *,
        infer_missing: bool = False,
        curve: Optional[Union[SLIP10Curve, str]] = None,
    ) -> _CurveJson:
        if curve is not None:
            curve = curve_from_name(curve)
            name = kvs.get("curve", curve.name)
            if name != curve.name:
                err_msg = f"curve mismatch: {name} instead of {curve.name}"
                raise SLIP10ValueError(err_msg)
            kvs = dict(kvs, curve=curve)
        return super().from_dict(kvs, infer_missing=infer_missing)  # type: ignore

    @classmethod
    def from_json(  # type: ignore
        cls: Type[_CurveJson],
        s: Union[str, bytes],
        *,
        infer_missing: bool = False,
        curve: Optional[Union[SLIP10Curve, str]] = None,
        **kw: Any,
    ) -> _CurveJson:
        kvs = json.loads(s, **kw)
        return cls.from_dict(kvs, infer_missing=infer_missing, curve=curve)


_ExtendedPublicKey = TypeVar("_ExtendedPublicKey", bound="ExtendedPublicKey")


@dataclass(frozen=True)
class ExtendedPublicKey(_CurveJsonMixin):
    pub_key: Point = field(
        metadata=config(encoder=_encode_point, decoder=_decode_point)
    )
    chain_code: bytes = field(
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)
    )
    curve: SLIP10Curve = field(
        default=SECP256K1,
        metadata=config(encoder=lambda c: c.name, decoder=curve_from_name),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        object.__setattr__(self, "curve", curve_from_name(self.curve))
        if isinstance(self.pub_key, (bytes, str)):
            object.__setattr__(
                self, "pub_key", self.curve.point_from_bytes(self.pub_key)
            )
        else:
            object.__setattr__(self, "pub_key", tuple(self.pub_key))
        object.__setattr__(self, "chain_code", bytes_from_octets(self.chain_code))
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        _assert_valid_curve(self.curve)
        _assert_valid_chain_code(self.chain_code)
        if len(self.pub_key) != 2 or self.pub_key[1] == INF[1]:
            raise SLIP10ValueError("invalid public key: infinity point")
        self.curve.ec.require_on_curve(self.pub_key)

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return self.curve.bytes_from_point(self.pub_key) + self.chain_code

    @classmethod
    def parse(
        cls: Type[_ExtendedPublicKey],
        data: Octets,
        curve: Union[SLIP10Curve, str] = SECP256K1,
        check_validity: bool = True,
    ) -> _ExtendedPublicKey:
        "Return an ExtendedPublicKey by parsing compressed point and chain code."

        curve = curve_from_name(curve)
        data = bytes_from_octets(data, curve.point_size + CHAIN_CODE_SIZE)
        pub_key = curve.point_from_bytes(data[:-CHAIN_CODE_SIZE])
        return cls(pub_key, data[-CHAIN_CODE_SIZE:], curve, check_validity)


_ExtendedSecretKey = TypeVar("_ExtendedSecretKey", bound="ExtendedSecretKey")


@dataclass(frozen=True)
class ExtendedSecretKey(_CurveJsonMixin):
    prv_key: int = field(
        repr=False,
        metadata=config(encoder=hex, decoder=int_from_integer),
    )
    chain_code: bytes = field(
        repr=False,
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex),
    )
    curve: SLIP10Curve = field(
        default=SECP256K1,
        metadata=config(encoder=lambda c: c.name, decoder=curve_from_name),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        object.__setattr__(self, "curve", curve_from_name(self.curve))
        object.__setattr__(self, "prv_key", int_from_integer(self.prv_key))
        object.__setattr__(self, "chain_code", bytes_from_octets(self.chain_code))
        if check_validity:
            self.assert_valid()

    @property
    def pub_key(self) -> Point:
        "Return the public point prv_key*G."
        return self.curve.mult(self.prv_key)

    @property
    def xpub(self) -> ExtendedPublicKey:
        "Return the neutered extended public key."
        return ExtendedPublicKey(self.pub_key, self.chain_code, self.curve)

    def assert_valid(self) -> None:
        _assert_valid_curve(self.curve)
        _assert_valid_chain_code(self.chain_code)
        # the secret scalar must never end up in the error message
        if not self.curve.is_valid_scalar(self.prv_key):
            raise SLIP10ValueError("invalid private key: not in 1..n-1")

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return self.curve.bytes_from_scalar(self.prv_key) + self.chain_code

    @classmethod
    def parse(
        cls: Type[_ExtendedSecretKey],
        data: Octets,
        curve: Union[SLIP10Curve, str] = SECP256K1,
        check_validity: bool = True,
    ) -> _ExtendedSecretKey:
        "Return an ExtendedSecretKey by parsing secret scalar and chain code."

        curve = curve_from_name(curve)
        data = bytes_from_octets(data, SCALAR_SIZE + CHAIN_CODE_SIZE)
        prv_key = int.from_bytes(data[:SCALAR_SIZE], byteorder="big", signed=False)
        return cls(prv_key, data[SCALAR_SIZE:], curve, check_validity)


@dataclass(frozen=True)
class ExtendedKeyPair:
    """Extended secret key with its precomputed extended public key.

    The only way to build it is from the ExtendedSecretKey,
    so that the two halves are always consistent.
    """

    xprv: ExtendedSecretKey
    xpub: ExtendedPublicKey = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.xprv, ExtendedSecretKey):
            err_msg = f"not an ExtendedSecretKey: {type(self.xprv).__name__}"
            raise SLIP10TypeError(err_msg)
        object.__setattr__(self, "xpub", self.xprv.xpub)

    @property
    def prv_key(self) -> int:
        return self.xprv.prv_key

    @property
    def pub_key(self) -> Point:
        return self.xpub.pub_key

    @property
    def chain_code(self) -> bytes:
        return self.xprv.chain_code

    @property
    def curve(self) -> SLIP10Curve:
        return self.xprv.curve


ExtendedKey = Union[ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey]
