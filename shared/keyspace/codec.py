"""Fixed-radix codec between keyspace indices and candidate strings."""

from shared.domain.consts import Keyspace


class KeyspaceCodec:
    """Maps integer indices to candidates of a given length.

    Index ``i`` of length ``L`` is ``i`` written in base ``len(charset)``
    with exactly ``L`` digits, most significant digit first, each digit
    replaced by the symbol at that position of the charset. With the
    default 36-symbol charset, index 0 of length 3 is ``"aaa"`` and
    index 1 is ``"aab"``.

    Stateless after construction, so one instance can be used by any
    number of workers.
    """

    def __init__(self, charset: str) -> None:
        if not charset:
            raise ValueError("Charset must not be empty")
        self.charset = charset
        self.base = len(charset)

    def combination_count(self, length: int) -> int:
        """Return the number of candidates of ``length`` symbols."""
        return self.base ** length

    def decode_candidate(self, index: int, length: int) -> str:
        """Convert index to the candidate of ``length`` symbols.

        ``index`` must lie in ``[0, combination_count(length))``; this is
        not checked since it runs once per candidate.
        """
        charset = self.charset
        base = self.base
        symbols = [""] * length
        for position in range(length - 1, -1, -1):
            index, digit = divmod(index, base)
            symbols[position] = charset[digit]
        return "".join(symbols)

    def max_length_within(self, limit: int = Keyspace.MAX_COMBINATIONS) -> int:
        """Return the largest length whose combination count is below ``limit``.

        Raises:
            ValueError: For a one-symbol charset, whose count never grows.
        """
        if self.base == 1:
            raise ValueError("A one-symbol charset has no length bound")
        length = 0
        while self.combination_count(length + 1) < limit:
            length += 1
        return length
