"""
Quote Text

A stored quote is one text field holding ``speaker: utterance`` lines
joined by newlines. The add/edit forms submit two parallel arrays, one of
speaker names and one of utterances; this module turns those arrays into
the stored body and back.

Only the first colon on a line separates speaker from utterance, so an
utterance may itself contain colons. A line entered without a speaker is
stored as the bare utterance and parses back with ``speaker=None``.

``compose`` refuses input that would not parse back into the rows that
were submitted: line breaks in any field, a colon in a speaker name, or a
colon in an utterance that has no speaker.
"""

from collections import namedtuple

from quotewall.errors import MalformedQuote

QuoteLine = namedtuple('QuoteLine', ['speaker', 'text'])


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _check_row(name, utterance):
    if any(ch in field for field in (name, utterance) for ch in '\r\n'):
        raise MalformedQuote('Each speaker and line must fit on a single line.')
    if ':' in name:
        raise MalformedQuote(f'Speaker names cannot contain a colon: {name!r}')
    if not name and ':' in utterance:
        raise MalformedQuote('A line with a colon needs a speaker.')


def compose(names, utterances):
    """Join parallel name/utterance arrays into a quote body.

    Rows where both fields are blank are dropped (the form always
    carries a spare empty row). Raises ``MalformedQuote`` when the
    arrays differ in length, a row would not parse back as entered, or
    nothing is left to store.
    """
    names = _as_list(names)
    utterances = _as_list(utterances)
    if len(names) != len(utterances):
        raise MalformedQuote(
            f'Got {len(names)} speaker(s) for {len(utterances)} line(s).'
        )

    lines = []
    for name, utterance in zip(names, utterances):
        name = (name or '').strip()
        utterance = (utterance or '').strip()
        if not name and not utterance:
            continue
        _check_row(name, utterance)
        lines.append(f'{name}: {utterance}' if name else utterance)

    if not lines:
        raise MalformedQuote('A quote needs at least one line.')
    return '\n'.join(lines)


def parse(body):
    """Split a quote body into ``QuoteLine`` tuples."""
    lines = []
    for raw in (body or '').split('\n'):
        raw = raw.strip()
        if not raw:
            continue
        speaker, sep, text = raw.partition(':')
        if sep:
            lines.append(QuoteLine(speaker.strip(), text.strip()))
        else:
            lines.append(QuoteLine(None, raw))
    return lines


def speakers(body):
    return [line.speaker for line in parse(body) if line.speaker]


def matches_speaker(body, query):
    """Case-insensitive substring match of ``query`` against the speakers.

    An empty query matches everything; lines without a speaker never match.
    """
    query = (query or '').strip().lower()
    if not query:
        return True
    return any(query in name.lower() for name in speakers(body))


def form_rows(body):
    """(speaker, utterance) pairs for pre-filling the edit form."""
    return [(line.speaker or '', line.text) for line in parse(body)]
