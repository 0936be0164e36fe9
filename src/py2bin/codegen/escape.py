'''C string literal escaping for arbitrary bytes'''

PRINTABLE_MIN = 32
PRINTABLE_MAX = 126

OCTAL_DIGITS = frozenset(b'01234567')
QUESTION_MARK = ord('?')

# Two-character escapes, checked before the printable range test
SIMPLE_ESCAPES = {
    ord('\n')   : '\\n',
    ord('\r')   : '\\r',
    ord('\t')   : '\\t',
    ord('\\')   : '\\\\',
    ord('"')    : '\\"',
    0           : '\\0',
}


def escape_bytes(data: bytes) -> str:
    '''Escape bytes so they can sit verbatim between double quotes in C source

    The result is plain ASCII with no raw control characters, backslashes,
    quotes or bytes above 126. A C compiler decodes it back to the input.
    '''
    out = []
    last = len(data) - 1

    for i, byte in enumerate(data):
        escape = SIMPLE_ESCAPES.get(byte)

        if escape is not None:
            # "\0" followed by an octal digit would be read as one longer escape
            if byte == 0 and i < last and data[i + 1] in OCTAL_DIGITS:
                escape = '\\000'

            out.append(escape)

        elif byte < PRINTABLE_MIN or byte > PRINTABLE_MAX:
            out.append(f'\\{byte:03o}')

        # "??" starts a trigraph under strict ISO modes
        elif byte == QUESTION_MARK and i > 0 and data[i - 1] == QUESTION_MARK:
            out.append('\\?')

        else:
            out.append(chr(byte))

    return ''.join(out)


def escape_text(text: str, encoding: str = 'utf-8') -> str:
    return escape_bytes(text.encode(encoding, 'surrogateescape'))


def c_string_literal(data: bytes | str) -> str:
    '''Quoted C string literal for bytes or text'''
    if isinstance(data, str):
        return f'"{escape_text(data)}"'

    return f'"{escape_bytes(data)}"'


__all__ = [
    'escape_bytes',
    'escape_text',
    'c_string_literal',
]
