#!/usr/bin/env python3

# Copyright (C) 2023 The slip10 developers
#
# This file is part of slip10. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10 including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the slip10 package."

name = "slip10"
__version__ = "2023.4.1"
__author__ = "The slip10 developers"
__author_email__ = "devs@slip10.org"
__copyright__ = "Copyright (C) 2023 The slip10 developers"
__license__ = "MIT License"
