"""Minimal printf-style formatting and integer parsing."""

from __future__ import annotations

__all__ = ["format_message", "atoi"]

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


def _signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value >= 1 << 31 else value


def format_message(fmt: str, *args: object) -> str:
    """Format ``fmt`` using only ``%d %l %x %p %s %c %%``.

    Unknown sequences are echoed as-is to draw attention to them.
    """
    values = iter(args)

    def take():
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    parts: list[str] = []
    pending = False
    for ch in fmt:
        if not pending:
            if ch == "%":
                pending = True
            else:
                parts.append(ch)
            continue
        pending = False
        if ch == "d":
            parts.append(str(_signed32(int(take()))))
        elif ch == "l":
            parts.append(str(int(take()) & _MASK64))
        elif ch == "x":
            parts.append(format(int(take()) & _MASK32, "X"))
        elif ch == "p":
            parts.append("0x" + format(int(take()) & _MASK64, "016X"))
        elif ch == "s":
            value = take()
            parts.append("(null)" if value is None else str(value))
        elif ch == "c":
            value = take()
            parts.append(value if isinstance(value, str) else chr(int(value) & 0xFF))
        elif ch == "%":
            parts.append("%")
        else:
            parts.append("%" + ch)
    return "".join(parts)


def atoi(text: str) -> int:
    """Parse the leading decimal digits of ``text``; no sign, no spaces."""
    n = 0
    for ch in text:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return _signed32(n)