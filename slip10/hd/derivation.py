#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP10 hierarchical deterministic key derivation.

SLIP10 generalizes the BIP32 derivation scheme
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki
to other elliptic curves of prime order, as specified in
https://github.com/satoshilabs/slips/blob/master/slip-0010.md.

Master key from seed:

    I = HMAC-SHA512(key=curve seed key, msg=seed)

Child key derivation (CKD) at index i:

- hardened (i >= H), secret key only:
  I = HMAC-SHA512(key=c_par, msg=0x00 || ser256(k_par) || ser32(i))
- normal (i < H):
  I = HMAC-SHA512(key=c_par, msg=serP(K_par) || ser32(i))

with k_i = I_L + k_par (mod n), K_i = K_par + I_L*G, and c_i = I_R.
I_L is the shift of the derivation step: derive_shift exposes it
together with the child public key.

I_L >= n, k_i == 0, or K_i == INF make the derived key invalid.
This happens with negligible probability on secp256k1,
but it does happen on nist256p1 (see the SLIP10 test vectors).
By default an invalid key is an error; with retry=True
the SLIP10 rule is applied instead:

- master key: I = HMAC-SHA512(key=curve seed key, msg=I)
- child key: I = HMAC-SHA512(key=c_par, msg=0x01 || I_R || ser32(i))

until a valid key is found.
"""

import hmac
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, TypeVar, Union

from btclib.alias import INF, Octets, Point
from btclib.utils import bytes_from_octets

from slip10.exceptions import (
    DerivationPathError,
    HardenedDerivationRequiresSecretKey,
    InvalidDerivedPoint,
    InvalidDerivedScalar,
    InvalidSeedLength,
    SLIP10TypeError,
    SLIP10ValueError,
)
from slip10.hd.curves import SCALAR_SIZE, SECP256K1, SLIP10Curve, curve_from_name
from slip10.hd.der_path import (
    DerPath,
    assert_valid_index,
    indexes_from_der_path,
    is_hardened,
    str_from_index_int,
)
from slip10.hd.keys import ExtendedKeyPair, ExtendedPublicKey, ExtendedSecretKey

log = logging.getLogger(__name__)

MIN_SEED_SIZE = 16
MAX_SEED_SIZE = 64

_XKey = TypeVar("_XKey", ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey)


def _hmac_sha512(key: bytes, msg: bytes) -> bytes:
    return hmac.new(key, msg, "sha512").digest()


def _split(hmac_: bytes) -> Tuple[int, bytes]:
    "Return I_L as int and I_R."
    offset = int.from_bytes(hmac_[:SCALAR_SIZE], byteorder="big", signed=False)
    return offset, hmac_[SCALAR_SIZE:]


def _retry_msg(chain_code_: bytes, index: int) -> bytes:
    return b"\x01" + chain_code_ + index.to_bytes(4, byteorder="big", signed=False)


def derive_master_key(
    seed: Octets,
    curve: Union[SLIP10Curve, str] = SECP256K1,
    retry: bool = False,
    strict: bool = True,
) -> ExtendedSecretKey:
    """Return the SLIP10 master extended secret key from seed.

    The seed must be 16 to 64 bytes long:
    with strict=False other lengths are accepted, with a warning.
    """

    curve = curve_from_name(curve)
    seed = bytes_from_octets(seed)
    if not MIN_SEED_SIZE <= len(seed) <= MAX_SEED_SIZE:
        err_msg = f"invalid seed length: {len(seed)} bytes"
        err_msg += f" not in {MIN_SEED_SIZE}..{MAX_SEED_SIZE}"
        if strict:
            raise InvalidSeedLength(err_msg)
        log.warning("non-standard seed accepted: %s", err_msg)

    hmac_ = _hmac_sha512(curve.seed_key, seed)
    prv_key, chain_code = _split(hmac_)
    while not curve.is_valid_scalar(prv_key):
        if not retry:
            raise InvalidDerivedScalar("invalid master key: I_L not in 1..n-1")
        log.info("invalid %s master key: retrying", curve.name)
        hmac_ = _hmac_sha512(curve.seed_key, hmac_)
        prv_key, chain_code = _split(hmac_)

    log.debug("%s master key derived", curve.name)
    return ExtendedSecretKey(prv_key, chain_code, curve)


def _ckd_prv(
    prv_key: int,
    chain_code: bytes,
    index: int,
    curve: SLIP10Curve,
    retry: bool,
) -> Tuple[int, bytes]:
    "Return the child secret scalar and chain code."

    index_bytes = index.to_bytes(4, byteorder="big", signed=False)
    if is_hardened(index):
        msg = b"\x00" + curve.bytes_from_scalar(prv_key) + index_bytes
    else:
        msg = curve.bytes_from_point(curve.mult(prv_key)) + index_bytes

    offset, child_chain_code = _split(_hmac_sha512(chain_code, msg))
    while True:
        if offset >= curve.n:
            err_msg = "invalid derived key: I_L not in 0..n-1"
        else:
            child_prv_key = (prv_key + offset) % curve.n
            if child_prv_key != 0:
                return child_prv_key, child_chain_code
            err_msg = "invalid derived key: zero private key"
        if not retry:
            raise InvalidDerivedScalar(err_msg)
        log.info("%s at index %s: retrying", err_msg, str_from_index_int(index))
        msg = _retry_msg(child_chain_code, index)
        offset, child_chain_code = _split(_hmac_sha512(chain_code, msg))


@dataclass(frozen=True)
class DerivedShift:
    """The I_L shift of a single child key derivation step.

    child_xpub.pub_key == parent pub_key + shift*G
    child prv_key == parent prv_key + shift (mod n)

    The shift allows to derive a child secret key
    from a parent secret key held somewhere else.
    """

    shift: int = field(repr=False)
    child_xpub: ExtendedPublicKey


def _derive_shift(
    pub_key: Point,
    chain_code: bytes,
    index: int,
    curve: SLIP10Curve,
    retry: bool,
    prv_key: Optional[int] = None,
) -> DerivedShift:

    index_bytes = index.to_bytes(4, byteorder="big", signed=False)
    if is_hardened(index):
        if prv_key is None:
            err_msg = "invalid hardened derivation from public key: "
            err_msg += str_from_index_int(index)
            raise HardenedDerivationRequiresSecretKey(err_msg)
        msg = b"\x00" + curve.bytes_from_scalar(prv_key) + index_bytes
    else:
        msg = curve.bytes_from_point(pub_key) + index_bytes

    offset, child_chain_code = _split(_hmac_sha512(chain_code, msg))
    while True:
        if offset >= curve.n:
            err: SLIP10ValueError = InvalidDerivedScalar(
                "invalid derived key: I_L not in 0..n-1"
            )
        else:
            child_pub_key = curve.add(pub_key, curve.mult(offset))
            if child_pub_key[1] != INF[1]:
                child_xpub = ExtendedPublicKey(child_pub_key, child_chain_code, curve)
                return DerivedShift(offset, child_xpub)
            err = InvalidDerivedPoint("invalid derived key: infinity point")
        if not retry:
            raise err
        log.info("%s at index %s: retrying", err, str_from_index_int(index))
        msg = _retry_msg(child_chain_code, index)
        offset, child_chain_code = _split(_hmac_sha512(chain_code, msg))


def derive_shift(
    parent: Union[ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey],
    index: int,
    retry: bool = False,
) -> DerivedShift:
    """Return the shift and the child public key at the given index.

    A hardened shift requires a secret parent key
    (ExtendedSecretKey or ExtendedKeyPair),
    a non-hardened one can be derived from an ExtendedPublicKey too.
    The shift is never logged: it is as secret as the parent chain code.
    """

    if not isinstance(parent, (ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey)):
        raise SLIP10TypeError(f"not an extended key: {type(parent).__name__}")
    assert_valid_index(index)

    prv_key: Optional[int] = None
    if isinstance(parent, (ExtendedSecretKey, ExtendedKeyPair)):
        prv_key = parent.prv_key
    return _derive_shift(
        parent.pub_key, parent.chain_code, index, parent.curve, retry, prv_key
    )


def derive_child_public_key(
    xpub: ExtendedPublicKey, index: int, retry: bool = False
) -> ExtendedPublicKey:
    """Public parent key to public child key derivation.

    Hardened indexes are not allowed.
    """

    if not isinstance(xpub, ExtendedPublicKey):
        raise SLIP10TypeError(f"not an ExtendedPublicKey: {type(xpub).__name__}")
    assert_valid_index(index)

    shift = _derive_shift(xpub.pub_key, xpub.chain_code, index, xpub.curve, retry)
    return shift.child_xpub


def derive_child_key(parent: _XKey, index: int, retry: bool = False) -> _XKey:
    """Derive the child key at the given index.

    The child key is of the same kind of the parent:
    ExtendedSecretKey, ExtendedKeyPair, or ExtendedPublicKey.
    """

    if not isinstance(parent, (ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey)):
        raise SLIP10TypeError(f"not an extended key: {type(parent).__name__}")
    assert_valid_index(index)
    log.debug(
        "%s child key derivation at index %s",
        parent.curve.name,
        str_from_index_int(index),
    )

    if isinstance(parent, ExtendedKeyPair):
        # K_i is not INF, hence k_i is not zero
        shift = _derive_shift(
            parent.pub_key,
            parent.chain_code,
            index,
            parent.curve,
            retry,
            parent.prv_key,
        )
        curve = parent.curve
        prv_key = (parent.prv_key + shift.shift) % curve.n
        xprv = ExtendedSecretKey(prv_key, shift.child_xpub.chain_code, curve)
        return ExtendedKeyPair(xprv)

    if isinstance(parent, ExtendedSecretKey):
        prv_key, chain_code = _ckd_prv(
            parent.prv_key, parent.chain_code, index, parent.curve, retry
        )
        return ExtendedSecretKey(prv_key, chain_code, parent.curve)

    return derive_child_public_key(parent, index, retry)


def derive_child_key_path(
    root: _XKey, der_path: DerPath, retry: bool = False
) -> _XKey:
    """Derive a key across a path spanning multiple depth levels.

    Valid DerPath examples:

    - string like "m/44h/0'/1H/0/10"
    - iterable integer indexes
    - one single integer index

    An empty path returns the root itself.
    The first failing step raises a DerivationPathError
    reporting its depth (0-based), index, and reason.
    """

    if not isinstance(root, (ExtendedSecretKey, ExtendedKeyPair, ExtendedPublicKey)):
        raise SLIP10TypeError(f"not an extended key: {type(root).__name__}")

    indexes = indexes_from_der_path(der_path)

    xkey = root
    for depth, index in enumerate(indexes):
        log.debug("derivation path depth %d", depth)
        try:
            xkey = derive_child_key(xkey, index, retry)
        except SLIP10ValueError as e:
            raise DerivationPathError(depth, index, e) from e
    return xkey
