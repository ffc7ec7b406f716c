"""
Frequency table of trigram keys and the counter that fills it from token sequences.
"""
import logging
import typing

from nltk import trigrams

logger = logging.getLogger(__name__)


def trigram_key(first: str, second: str, third: str) -> str:
    return f"{first} {second} {third}"


class FrequencyTable:
    """
    Maps trigram keys to the number of times they occurred. One table collects the counts of every source of a run.
    """

    def __init__(self, counts: typing.Mapping[str, int] | None = None) -> None:
        self.__counts = {}
        if counts is not None:
            for key, count in counts.items():
                self.increment(key, count)

    def __len__(self) -> int:
        return len(self.__counts)

    def __contains__(self, key: str) -> bool:
        return key in self.__counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(self.items())!r})"

    def increment(self, key: str, amount: int = 1) -> None:
        """
        Inserts the key with count 0 if it is missing and adds amount to it.
        :param key: trigram key
        :param amount: non-negative number to add
        :return: None
        """
        if amount < 0:
            raise ValueError(f"Counts can only grow, got {amount} for {key!r}")
        count = self.__counts.setdefault(key, 0)
        self.__counts[key] = count + amount

    def get_count(self, key: str) -> int:
        return self.__counts.get(key, 0)

    def get_total(self) -> int:
        return sum(self.__counts.values())

    def items(self) -> typing.List[typing.Tuple[str, int]]:
        """
        Returns all pairs ordered by key, the order in which ties are reported
        :return: list of (key, count)
        """
        return sorted(self.__counts.items())

    def merge(self, other: "FrequencyTable") -> typing.Self:
        """
        Adds the counts of another table to this one
        :param other: table to merge in
        :return: self
        """
        for key, count in other.items():
            self.increment(key, count)
        return self


def count_trigrams(tokens: typing.Sequence[str], table: FrequencyTable) -> FrequencyTable:
    """
    Counts every window of three consecutive tokens. Sequences with fewer than three tokens add nothing.
    Example: ["a", "b", "c", "a"] --> {"a b c": 1, "b c a": 1}
    :param tokens: tokens of a single source
    :param table: table to update in place
    :return: the updated table
    """
    if len(tokens) < 3:
        logger.debug("Skipping sequence of %d tokens", len(tokens))
        return table

    for first, second, third in trigrams(tokens):
        table.increment(trigram_key(first, second, third))

    logger.debug("Counted %d trigrams", len(tokens) - 2)
    return table
