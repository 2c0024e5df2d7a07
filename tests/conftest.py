"""
Shared pytest fixtures for dependencies info tests.

Provides:
- Canonical LICENSE texts for the recognised SPDX licenses
- A project layout with a licenses directory
- Task settings bound to that layout
"""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if SRC_ROOT.is_dir():
    sys.path.insert(0, str(SRC_ROOT))

from depinfo_core.settings import TaskSettings  # noqa: E402

# =============================================================================
# License texts
# =============================================================================

APACHE_2_0_TEXT = textwrap.dedent(
    """
                                     Apache License
                               Version 2.0, January 2004
                            http://www.apache.org/licenses/

       TERMS AND CONDITIONS FOR USE, REPRODUCTION, AND DISTRIBUTION
    """
)

MIT_TEXT = textwrap.dedent(
    """
    The MIT License (MIT)

    Copyright (c) 2015 Example Authors

    Permission is hereby granted, free of charge, to any person obtaining a copy of
    this software and associated documentation files (the "Software"), to deal in
    the Software without restriction, including without limitation the rights to
    use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies
    of the Software, and to permit persons to whom the Software is furnished to do
    so, subject to the following conditions:

    The above copyright notice and this permission notice shall be included in all
    copies or substantial portions of the Software.

    THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
    IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
    FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
    AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
    LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
    OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
    SOFTWARE.
    """
)

_BSD_HEAD = """
    Copyright (c) 2010, Example Inc.
    All rights reserved.

    Redistribution and use in source and binary forms, with or without
    modification, are permitted provided that the following conditions
    are met:
    1. Redistributions of source code must retain the above copyright
       notice, this list of conditions and the following disclaimer.
    2. Redistributions in binary form must reproduce the above copyright
       notice, this list of conditions and the following disclaimer in the
       documentation and/or other materials provided with the distribution.
"""

_BSD_THIRD_CLAUSE = """
    3. Neither the name of the copyright holder nor the names of its
       contributors may be used to endorse or promote products derived from
       this software without specific prior written permission.
"""

_BSD_TAIL = """
    THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR
    IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES
    OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED.
    IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
    INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT
    NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
    DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
    THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
    (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF
    THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

BSD_2_TEXT = textwrap.dedent(_BSD_HEAD + _BSD_TAIL)
BSD_3_TEXT = textwrap.dedent(_BSD_HEAD + _BSD_THIRD_CLAUSE + _BSD_TAIL)

LGPL_3_0_TEXT = textwrap.dedent(
    """
                       GNU LESSER GENERAL PUBLIC LICENSE
                           Version 3, 29 June 2007

     Copyright (C) 2007 Free Software Foundation, Inc. <http://fsf.org/>
    """
)

CDDL_1_1_TEXT = textwrap.dedent(
    """
    COMMON DEVELOPMENT AND DISTRIBUTION LICENSE (CDDL) Version 1.1

    1. Definitions.
    """
)

MPL_2_0_TEXT = textwrap.dedent(
    """
    Mozilla Public License Version 2.0
    ==================================

    1. Definitions
    """
)

COMMENTED_APACHE_TEXT = textwrap.dedent(
    """
    /*
     * Licensed under the Apache License,
     * Version 2.0 (the "License"); you may not use this file except in compliance
     */
    """
)

CUSTOM_TEXT = textwrap.dedent(
    """
    Example Corp Proprietary Redistribution Terms

    You may redistribute this library only as part of an unmodified product.
    """
)


@pytest.fixture
def license_texts() -> dict[str, str]:
    return {
        "Apache-2.0": APACHE_2_0_TEXT,
        "MIT": MIT_TEXT,
        "BSD-2-Clause": BSD_2_TEXT,
        "BSD-3-Clause": BSD_3_TEXT,
        "LGPL-3.0": LGPL_3_0_TEXT,
        "CDDL-1.1": CDDL_1_1_TEXT,
        "MPL-2.0": MPL_2_0_TEXT,
    }


# =============================================================================
# Project layout fixtures
# =============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A checkout named after the hosted repository, as Custom license URLs expect."""
    project = tmp_path / "elasticsearch" / "server"
    project.mkdir(parents=True)
    return project


@pytest.fixture
def licenses_dir(project_dir: Path) -> Path:
    path = project_dir / "licenses"
    path.mkdir()
    return path


@pytest.fixture
def write_license(licenses_dir: Path) -> Callable[[str, str], Path]:
    def _write(filename: str, text: str) -> Path:
        path = licenses_dir / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_settings(project_dir: Path) -> Callable[..., TaskSettings]:
    def _make(**overrides: Any) -> TaskSettings:
        return TaskSettings.for_project(project_dir, **overrides)

    return _make
