"""Character classes and error expectations shared by the INI tokenizers."""

PUNCTUATION = ".-_"
WHITESPACE = " \t"
COMMENT = "#;"
NEWLINE = "\r\n"


def is_name_punctuation(ch: str) -> bool:
    return ch in PUNCTUATION


def is_name_start(ch: str) -> bool:
    return ch.isalpha() or is_name_punctuation(ch)


def is_name_mid(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or is_name_punctuation(ch)


def is_name_end(ch: str) -> bool:
    # Names may not end in punctuation.
    return ch.isalpha() or ch.isdecimal()


class Expectation:
    """What the tokenizer expected to find when it gave up."""

    EQUAL = "Expected '='."
    RIGHT_BRACKET = "Expected ']'."
    SECTION_NAME = "Expected section name."
    SECTION_KEY_OR_COMMENT = "Expected section, key or comment."
    COMMENT_OR_WHITE_SPACE = "Expected comment or white space."
    NON_PUNCTUATION = "Expected non-punctuation."
