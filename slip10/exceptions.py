#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The generic ones are only meant to discriminate between Exceptions
raised by slip10 from those raised by other codebase.
They are derived from the btclib ones, as the elliptic curve arithmetic
and the octets/integer conversions are btclib's:
malformed points and wrong sized octets raise BTClibValueError.
Users are usually better off just dealing with the regular
ValueError and TypeError from which all of them are derived.

The derivation specific ones allow to tell apart the different ways
a SLIP10 derivation can fail.
"""

from typing import Optional

from btclib.exceptions import BTClibTypeError, BTClibValueError


class SLIP10ValueError(BTClibValueError):
    pass


class SLIP10TypeError(BTClibTypeError):
    pass


class InvalidSeedLength(SLIP10ValueError):
    pass


class InvalidDerivedScalar(SLIP10ValueError):
    "The derived I_L is zero or not less than the curve order."


class InvalidDerivedPoint(SLIP10ValueError):
    "Public derivation has produced the point at infinity."


class HardenedDerivationRequiresSecretKey(SLIP10ValueError):
    pass


class IndexOutOfRange(SLIP10ValueError):
    pass


class DerivationPathError(SLIP10ValueError):
    """A derivation path step has failed.

    depth is the 0-based position of the failing index in the path,
    reason is the error raised by that single derivation step.
    """

    def __init__(
        self, depth: int, index: int, reason: Optional[SLIP10ValueError] = None
    ) -> None:
        self.depth = depth
        self.index = index
        self.reason = reason
        err_msg = f"derivation failed at depth {depth} (index {hex(index)})"
        if reason is not None:
            err_msg += f": {reason}"
        super().__init__(err_msg)
