"""
Instruction extractor.

Splits one line of pipe script into a command name and its arguments.
"""


def extract_instruction(line: str) -> list[str]:
    """
    Split an instruction line into tokens, handling quotes.

    Quoted substrings become a single token with the quotes removed.
    Never raises: an unterminated quote swallows the rest of the line.

    Args:
        line: The raw instruction line

    Returns:
        List of tokens; element 0 is the command or directive name

    Example:
        >>> extract_instruction('copy "my file.txt" out/')
        ['copy', 'my file.txt', 'out/']
    """
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    quoted = False  # current token contained quotes, so "" is a real token
    quote_char = None
    i = 0

    while i < len(line):
        char = line[i]

        if in_quotes:
            if char == quote_char:
                in_quotes = False
            elif char == "\\" and i + 1 < len(line) and line[i + 1] == quote_char:
                i += 1
                current.append(line[i])
            else:
                current.append(char)
        elif char in "\"'":
            in_quotes = True
            quoted = True
            quote_char = char
        elif char in " \t":
            if current or quoted:
                tokens.append("".join(current))
                current = []
                quoted = False
        else:
            current.append(char)

        i += 1

    if current or quoted:
        tokens.append("".join(current))

    return tokens
