"""Reference implementation of the sum/concat business rules."""

from __future__ import annotations

from addsvc.services import IntOverflowError, MaxSizeExceededError, TwoZeroesError

INT_MAX = 2**31 - 1
INT_MIN = -(INT_MAX + 1)
MAX_CONCAT_LENGTH = 10


class AddService:
    """Stateless service; the HTTP layer only ever sees it through endpoints."""

    async def sum(self, a: int, b: int) -> int:
        """Return ``a + b``.

        Raises :class:`TwoZeroesError` when both operands are zero and
        :class:`IntOverflowError` when adding *b* would carry *a* past the
        int32 bounds. Operands themselves are not range-checked.
        """
        if a == 0 and b == 0:
            raise TwoZeroesError()
        if (b > 0 and a > INT_MAX - b) or (b < 0 and a < INT_MIN - b):
            raise IntOverflowError()
        return a + b

    async def concat(self, a: str, b: str) -> str:
        """Return ``a + b``, or raise :class:`MaxSizeExceededError` if too long.

        Length is measured in UTF-8 bytes.
        """
        if len(a.encode()) + len(b.encode()) > MAX_CONCAT_LENGTH:
            raise MaxSizeExceededError()
        return a + b
