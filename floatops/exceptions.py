#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Custom exceptions for configuration and environment failures.

Exceptions
==========

Numeric operations never raise: invalid results are reported through the
IEEE sentinels (NaN, +/-Infinity). The exceptions below cover misuse of the
package (unknown widths or backends) and problems with the host environment
(a missing C math library).
"""


class FloatOpsError(Exception):
    """Base exception for all floatops failures.

    All package-specific exceptions inherit from this base class,
    allowing callers to catch them with a single handler.
    """

    pass


class UnsupportedWidthError(FloatOpsError):
    """Requested floating-point width has no constant table.

    Raised when a backend is requested for a width other than 32 or 64 bits.
    """

    def __init__(self, message: str, width: object = None):
        """Initialize width error with the offending width.

        Args:
            message: Error description
            width: The width that was requested
        """
        super().__init__(message)
        self.width = width


class ConfigurationError(FloatOpsError):
    """Invalid build target or backend configuration.

    Raised when a backend name or target value is not recognised.
    """

    pass


class LibraryLoadError(FloatOpsError):
    """C math library or one of its entry points is unavailable.

    Raised by the foreign-function layer. The dispatch resolver handles it by
    resolving the affected operations to their manual fallbacks.
    """

    def __init__(self, message: str, library: str | None = None, symbol: str | None = None):
        """Initialize load error with library context.

        Args:
            message: Error description
            library: Library name or path that was tried
            symbol: Entry point that could not be bound, if any
        """
        super().__init__(message)
        self.library = library
        self.symbol = symbol
