"""SPDX license templates matched against LICENSE file contents."""

from __future__ import annotations

import re

UNKNOWN = "UNKNOWN"


def _flexible_whitespace(lines: list[str]) -> str:
    # Line breaks and spacing in LICENSE files vary, so any whitespace run may be absent or repeated.
    return re.sub(r"\s+", r"\\s*", "\n".join(lines))


APACHE_2_0 = r"Apache.*License.*(v|V)ersion.*2\.0"

BSD_2 = _flexible_whitespace(
    [
        "Redistribution and use in source and binary forms, with or without",
        "modification, are permitted provided that the following conditions",
        "are met:",
        r"1\. Redistributions of source code must retain the above copyright",
        r"notice, this list of conditions and the following disclaimer\.",
        r"2\. Redistributions in binary form must reproduce the above copyright",
        "notice, this list of conditions and the following disclaimer in the",
        r"documentation and/or other materials provided with the distribution\.",
        "THIS SOFTWARE IS PROVIDED BY .+ (``|''|\")AS IS(''|\") AND ANY EXPRESS OR",
        "IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES",
        r"OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED\.",
        "IN NO EVENT SHALL .+ BE LIABLE FOR ANY DIRECT, INDIRECT,",
        r"INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES \(INCLUDING, BUT",
        "NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,",
        r"DATA, OR PROFITS; OR BUSINESS INTERRUPTION\) HOWEVER CAUSED AND ON ANY",
        "THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT",
        r"\(INCLUDING NEGLIGENCE OR OTHERWISE\) ARISING IN ANY WAY OUT OF THE USE OF",
        r"THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE\.",
    ]
)

BSD_3 = _flexible_whitespace(
    [
        "Redistribution and use in source and binary forms, with or without",
        "modification, are permitted provided that the following conditions",
        "are met:",
        r"(1\.)? Redistributions of source code must retain the above copyright",
        r"notice, this list of conditions and the following disclaimer\.",
        r"(2\.)? Redistributions in binary form must reproduce the above copyright",
        "notice, this list of conditions and the following disclaimer in the",
        r"documentation and/or other materials provided with the distribution\.",
        r"((3\.)? The name of .+ may not be used to endorse or promote products",
        r"derived from this software without specific prior written permission\.|",
        r"(3\.)? Neither the name of .+ nor the names of its",
        "contributors may be used to endorse or promote products derived from",
        r"this software without specific prior written permission\.)",
        "THIS SOFTWARE IS PROVIDED BY .+ (``|''|\")AS IS(''|\") AND ANY EXPRESS OR",
        "IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES",
        r"OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED\.",
        "IN NO EVENT SHALL .+ BE LIABLE FOR ANY DIRECT, INDIRECT,",
        r"INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES \(INCLUDING, BUT",
        "NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,",
        r"DATA, OR PROFITS; OR BUSINESS INTERRUPTION\) HOWEVER CAUSED AND ON ANY",
        "THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT",
        r"\(INCLUDING NEGLIGENCE OR OTHERWISE\) ARISING IN ANY WAY OUT OF THE USE OF",
        r"THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE\.",
    ]
)

CDDL_1_0 = "COMMON DEVELOPMENT AND DISTRIBUTION LICENSE.*Version 1.0"
CDDL_1_1 = "COMMON DEVELOPMENT AND DISTRIBUTION LICENSE.*Version 1.1"
ICU = "ICU License - ICU 1.8.1 and later"
LGPL_3_0 = "GNU LESSER GENERAL PUBLIC LICENSE.*Version 3"

MIT = _flexible_whitespace(
    [
        "Permission is hereby granted, free of charge, to any person obtaining a copy of",
        r"this software and associated documentation files \(the \"Software\"\), to deal in",
        "the Software without restriction, including without limitation the rights to",
        "use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies",
        "of the Software, and to permit persons to whom the Software is furnished to do",
        "so, subject to the following conditions:",
        "The above copyright notice and this permission notice shall be included in all",
        r"copies or substantial portions of the Software\.",
        "THE SOFTWARE IS PROVIDED \"AS IS\", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR",
        "IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,",
        r"FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT\. IN NO EVENT SHALL THE",
        "AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER",
        "LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,",
        "OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE",
        r"SOFTWARE\.",
    ]
)

MPL_1_1 = "Mozilla Public License.*Version 1.1"
MPL_2_0 = r"Mozilla\s*Public\s*License\s*Version\s*2\.0"

# Checked in order; the first template found in the text wins.
SPDX_TEMPLATES: dict[str, str] = {
    "Apache-2.0": APACHE_2_0,
    "MIT": MIT,
    "BSD-2-Clause": BSD_2,
    "BSD-3-Clause": BSD_3,
    "LGPL-3.0": LGPL_3_0,
    "CDDL-1.0": CDDL_1_0,
    "CDDL-1.1": CDDL_1_1,
    "ICU": ICU,
    "MPL-1.1": MPL_1_1,
    "MPL-2.0": MPL_2_0,
}

_COMPILED_TEMPLATES: list[tuple[str, re.Pattern[str]]] = [
    (spdx, re.compile(pattern, re.DOTALL)) for spdx, pattern in SPDX_TEMPLATES.items()
]


def spdx_identifiers() -> list[str]:
    return list(SPDX_TEMPLATES)


def check_spdx_license(license_text: str) -> str | None:
    """Return the SPDX identifier of the first template found in the text, or None."""
    for spdx, pattern in _COMPILED_TEMPLATES:
        if pattern.search(license_text):
            return spdx
    return None
