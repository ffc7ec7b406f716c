"""
This file contains the classes that make up one trigram run. A TextSource holds the decoded text of a single file or
of standard input. The TrigramCorpus-object is to be called to operate on all sources of a run: it creates a
TextSource for every input, tokenizes it and folds its trigrams into one shared frequency table that is ranked at the
end. Trigrams never span two sources.
"""
import logging
import os
import typing

import pandas as pd
import tqdm

from frequency import FrequencyTable, count_trigrams
from ranking import REPORT_SIZE, check_limit, format_report, rank
from tokenizer import DEFAULT_TOKENIZER, Tokenizer

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ("utf-8", "latin_1")
STDIN_NAME = "<stdin>"

# Reasons for skipping a file
MISSING = "missing"
UNDECODABLE = "undecodable"


class SourceDecodeError(ValueError):
    """Raised when a source could be read but none of the given encodings decodes it"""

    def __init__(self, path: str, encodings: typing.Sequence[str]) -> None:
        super().__init__(f"File {path} could not be decoded with {', '.join(encodings)}")
        self.path = path
        self.encodings = tuple(encodings)


def decode(data: bytes, encodings: typing.Sequence[str], name: str) -> str:
    """
    Decodes raw bytes with the first encoding that fits. Line endings are kept as they are, so a carriage return
    reaches the tokenizer unchanged
    :param data: raw content of a source
    :param encodings: encodings to try in order
    :param name: name of the source for logging and errors
    :return: decoded text
    :raises SourceDecodeError: if no encoding fits
    """
    for enc in encodings:
        try:
            text = data.decode(enc)
        except UnicodeDecodeError:
            logger.debug("Source %s is not valid %s", name, enc)
            continue
        logger.debug("Loaded %s as %s", name, enc)
        return text
    raise SourceDecodeError(name, encodings)


class TextSource:
    """
    The TextSource-class represents the text of a single input. Each source is tokenized on its own, so the last
    words of one source never form a trigram with the first words of the next.
    """

    def __init__(self, name: str, text: str) -> None:
        self.__name = name
        self.__text = text

    @classmethod
    def from_file(cls, path: str, encodings: typing.Sequence[str] = DEFAULT_ENCODINGS) -> "TextSource":
        """
        Reads the whole file, trying every encoding in order until one succeeds
        :param path: path of the text file
        :param encodings: encodings to try
        :return: TextSource of the file
        :raises OSError: if the file cannot be opened
        :raises SourceDecodeError: if no encoding fits
        """
        with open(path, "rb") as f:
            data = f.read()
        return cls(path, decode(data, encodings, path))

    @classmethod
    def from_stream(cls, stream: typing.BinaryIO | typing.TextIO, encodings: typing.Sequence[str] = DEFAULT_ENCODINGS,
                    name: str = STDIN_NAME) -> "TextSource":
        """
        Joins all lines of the stream into one text. Lines are split at "\\n" only and every line gets a single
        trailing space. Binary streams are decoded like files
        Example: "I love\\nsandwiches\\n" --> "I love sandwiches "
        :param stream: stream to read, usually the binary buffer of standard input
        :param encodings: encodings to try for binary streams
        :param name: name to report for the source
        :return: TextSource of the stream
        :raises SourceDecodeError: if no encoding fits
        """
        data = stream.read()
        if isinstance(data, bytes):
            data = decode(data, encodings, name)

        lines = data.split("\n")
        # text after the last newline is only a line if it is not empty
        if not lines[-1]:
            lines.pop()
        text = "".join([
            line + " "
            for line in lines
        ])
        return cls(name, text)

    def get_name(self) -> str:
        return self.__name

    def get_text(self) -> str:
        return self.__text

    def get_tokens(self, tokenizer: Tokenizer = DEFAULT_TOKENIZER) -> typing.List[str]:
        return tokenizer.tokenize(self.__text)


class TrigramCorpus:
    """
    The TrigramCorpus-class collects the trigram counts of every source of a run in a single FrequencyTable. Sources
    are counted in the order they are added. Files that cannot be opened or decoded are remembered and skipped.
    """

    def __init__(self, tokenizer: Tokenizer | None = None,
                 encodings: str | typing.Sequence[str] = DEFAULT_ENCODINGS) -> None:
        if tokenizer is None:
            tokenizer = DEFAULT_TOKENIZER
        self.__tokenizer = tokenizer
        self.__encodings = []
        self.set_encodings(encodings)
        self.__table = FrequencyTable()
        self.__sources = []
        self.__skipped = []
        self.__report_size = REPORT_SIZE

    def get_table(self) -> FrequencyTable:
        return self.__table

    def get_sources(self) -> typing.List[str]:
        return list(self.__sources)

    def get_skipped_files(self) -> typing.List[typing.Tuple[str, str]]:
        """
        Returns every skipped file with its reason (MISSING or UNDECODABLE) in the order they were added
        :return: list of (path, reason)
        """
        return list(self.__skipped)

    def get_trigram_total(self) -> int:
        return self.__table.get_total()

    def get_encodings(self) -> typing.List[str]:
        return list(self.__encodings)

    def get_report_size(self) -> int:
        return self.__report_size

    def set_encodings(self, encodings: str | typing.Sequence[str]) -> None:
        if isinstance(encodings, str):
            encodings = [encodings]
        if not encodings:
            raise ValueError("At least one encoding is required")
        self.__encodings = list(encodings)

    def set_report_size(self, report_size: int) -> None:
        self.__report_size = check_limit(report_size)

    def add_source(self, source: TextSource) -> typing.Self:
        """
        Tokenizes one source and adds its trigrams to the table
        :param source: TextSource to count
        :return: self
        """
        tokens = source.get_tokens(self.__tokenizer)
        count_trigrams(tokens, self.__table)
        self.__sources.append(source.get_name())
        logger.debug("Source %s: %d tokens, %d distinct trigrams so far",
                     source.get_name(), len(tokens), len(self.__table))
        return self

    def add_stream(self, stream: typing.BinaryIO | typing.TextIO, name: str = STDIN_NAME) -> typing.Self:
        """
        Counts the whole stream as one source. A stream that no encoding decodes is skipped like a file
        :param stream: stream to read, usually the binary buffer of standard input
        :param name: name to report for the source
        :return: self
        """
        try:
            source = TextSource.from_stream(stream, self.__encodings, name)
        except SourceDecodeError as e:
            logger.info("%s", e)
            self.__skipped.append((name, UNDECODABLE))
            return self
        return self.add_source(source)

    def add_files(self, paths: typing.Iterable[str | os.PathLike]) -> typing.Self:
        """
        Counts every file in the given order. Missing and undecodable files are skipped
        :param paths: paths of the text files
        :return: self
        """
        for path in tqdm.tqdm(list(paths), desc="Counting trigrams", disable=None):
            path = os.fspath(path)
            try:
                source = TextSource.from_file(path, self.__encodings)
            except SourceDecodeError as e:
                logger.info("%s", e)
                self.__skipped.append((path, UNDECODABLE))
                continue
            except OSError as e:
                logger.info("Could not open %s: %s", path, e)
                self.__skipped.append((path, MISSING))
                continue
            self.add_source(source)
        return self

    def rank(self) -> pd.DataFrame:
        return rank(self.__table, self.__report_size)

    def report_lines(self) -> typing.List[str]:
        return format_report(self.rank())
