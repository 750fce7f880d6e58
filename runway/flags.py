"""
Flag normalization: turn parser output into the record handed to the toolkit.

normalize() applies, in order:
1. strip leading dashes from every key ('--port' -> 'port');
2. rename 'tls-key' -> 'tlsKey' and 'tls-cert' -> 'tlsCert';
3. '--no-delete' given -> delete = False (otherwise 'delete' stays unset and
   the toolkit applies its own default, which is to delete);
4. '--no-typescript' given -> typescript = False;
5. 'interactive' keeps an existing value, otherwise takes the caller's
   `interactive` argument (True when runway runs as the top-level program).

Nothing else is renamed or removed: delegated flags such as 'assetsInlineLimit'
or 'logLevel' pass through untouched, and so do 'no-delete'/'no-typescript'.
"""
from types import MappingProxyType

RENAMES = MappingProxyType({
    "tls-key": "tlsKey",
    "tls-cert": "tlsCert",
})

# negated flag -> key it forces to False
NEGATIONS = MappingProxyType({
    "no-delete": "delete",
    "no-typescript": "typescript",
})


def normalize(flags, /, *, interactive=False):
    """
    Build a read-only flag record from a canonical-spelling -> value mapping.

    Parameters
    - flags: Mapping[str, bool | str | int | float]
      as produced by runway.arguments.parse().
    - interactive: bool
      default for the 'interactive' key when the flags do not set it.

    Returns
    - MappingProxyType[str, object]
    """
    if not isinstance(interactive, bool):
        raise TypeError("normalize() 'interactive' must be a bool")

    record = {key.lstrip("-"): value for key, value in flags.items()}

    for old, new in RENAMES.items():
        if old in record:
            record[new] = record.pop(old)

    for negation, key in NEGATIONS.items():
        if record.get(negation):
            record[key] = False

    record.setdefault("interactive", interactive)
    return MappingProxyType(record)


__all__ = (
    "RENAMES",
    "NEGATIONS",
    "normalize",
)
