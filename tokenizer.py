"""
Splits raw text into lowercase word tokens. What counts as a word character is decided by a classifier that is chosen
once when the Tokenizer is created, instead of depending on the process locale.
"""
import logging
import typing

logger = logging.getLogger(__name__)

# Straight quote, U+201C left and U+201D right double quotation mark
QUOTATION_MARKS = frozenset({"\"", "“", "”"})
SEPARATORS = frozenset({" ", "\n"})


def is_word_character(char: str) -> bool:
    """
    Default classification policy: Unicode alphanumerics and anything outside 7-bit ASCII are word content.
    Example: "í" --> True, "," --> False
    :param char: a single character
    :return: whether the character belongs to a word
    """
    return char.isalnum() or ord(char) > 127


class Tokenizer:
    """
    The Tokenizer-class turns text into an ordered list of normalized tokens. Characters are lowercased one by one,
    quotation marks act as word boundaries, spaces and newlines end the current word and every other character that
    the classifier rejects is dropped without ending the word.
    """

    def __init__(self, word_character: typing.Callable[[str], bool] = is_word_character) -> None:
        self.__word_character = word_character

    def get_word_character(self) -> typing.Callable[[str], bool]:
        return self.__word_character

    def tokenize(self, text: str) -> typing.List[str]:
        """
        Tokenizes the text.
        Example: "“Sandwiches,” he said" --> ["sandwiches", "he", "said"]
        :param text: decoded text of one source
        :return: list of tokens in source order
        """
        tokens = []
        word = []
        for char in text:
            for folded in char.lower():
                if folded in QUOTATION_MARKS:
                    folded = " "

                if self.__word_character(folded):
                    word.append(folded)
                elif folded in SEPARATORS:
                    if word:
                        tokens.append("".join(word))
                        word = []

        if word:
            tokens.append("".join(word))

        logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
        return tokens


DEFAULT_TOKENIZER = Tokenizer()


def tokenize(text: str) -> typing.List[str]:
    return DEFAULT_TOKENIZER.tokenize(text)
