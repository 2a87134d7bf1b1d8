"""
Commander resolution engine: token-stream surgery performed before a command parses its flags.

Operations
- valid_command_names(names, tokens)
    Every registered name the joined non-flag tokens start with.
- resolve(names, tokens, default=None)
    The most specific of those names, or the default when none qualifies.
- matches(flag, token)
    Whether a raw token is (an abbreviation of) one of the flag's switches.
- remove_global_options(flags, tokens)
    Strip global flag tokens, and the value that heuristically follows them, in place.
- remove_command_name(name, tokens)
    Strip the first occurrence of each word of the resolved command name.

Nothing here raises on odd input: the worst outcome of an ambiguous command line is a swallowed
positional argument (see remove_global_options).
"""
import logging

logger = logging.getLogger(__name__)


def valid_command_names(names, tokens, /):
    """
    Return the registered names that prefix the command line.

    The command line is rebuilt by joining, with single spaces and in order, every token that
    does not start with a dash. A name qualifies when that string starts with it; there is no
    word-boundary check, so "foo" also qualifies for "foobar".
    """
    line = " ".join(token for token in tokens if not token.startswith("-"))
    return [name for name in names if line.startswith(name)]


def resolve(names, tokens, /, default=None):
    """
    Pick the active command name.

    Every candidate prefixes the same string, so the lexicographically greatest candidate is also
    the longest one: "foo bar" wins over "foo". When nothing qualifies the default is returned,
    and the default may be None (no active command).
    """
    if candidates := valid_command_names(names, tokens):
        name = max(candidates)
    else:
        name = default
    logger.debug("resolved command %r from candidates %r", name, candidates)
    return name


def matches(flag, token, /):
    """
    Classify token against flag.

    Returns "inline" for "--name=value" forms, "spaced" for bare switches (the value, if any,
    follows as the next token) and None when token is not one of the flag's switches. A token
    matches when a switch starts with its text, so unambiguous abbreviations strip too. The
    lone "-" and "--" never match.
    """
    if not token.startswith("-") or token in ("-", "--"):
        return None
    head, inline, _ = token.partition("=")
    if not any(string.startswith(head) for string in flag.option_strings):
        return None
    return "inline" if inline else "spaced"


def remove_global_options(flags, tokens, /):
    """
    Remove global flags from tokens in place so the active command never sees them.

    Each flag is processed independently with a two-state scan:
    - a matching token is deleted and opens a value slot;
    - while the slot is open, the next token is deleted as the value unless it starts with '-';
    - any kept token closes the slot.

    The scan does not know whether the flag takes a value: a presence-only flag followed by a
    positional argument swallows that argument. Flags stripped here were already parsed from a
    copy of the token list (Runner.parse_global_options).
    """
    for flag in flags:
        past_switch, consumed = False, False
        survivors = []
        for token in tokens:
            if kind := matches(flag, token):
                past_switch, consumed = kind == "spaced", False
            elif past_switch and not consumed and not token.startswith("-"):
                consumed = True
            else:
                consumed = True
                survivors.append(token)
        tokens[:] = survivors
    logger.debug("tokens left after global flags: %r", tokens)
    return tokens


def remove_command_name(name, tokens, /):
    """
    Return tokens without the words of name, dropping only the first occurrence of each word.
    """
    parts = name.split() if name else []
    removed = []
    survivors = []
    for token in tokens:
        if token in parts and token not in removed:
            removed.append(token)
            continue
        survivors.append(token)
    return survivors


__all__ = (
    "valid_command_names",
    "resolve",
    "matches",
    "remove_global_options",
    "remove_command_name",
)
