"""Named org entities (\\alpha, \\rarr{}, ...) to UTF-8 text"""

from html.entities import html5
from typing import Optional


# Org names that differ from, or are missing in, the HTML5 table.
ORG_ENTITIES: dict[str, str] = {
    'to':         '→',
    'gets':       '←',
    'space':      ' ',
    'nbsp':       '\u00a0',
    'ast':        '*',
    'under':      '_',
    'slash':      '/',
    'plus':       '+',
    'vert':       '|',
    'vbar':       '|',
    'backslash':  '\\',
    'dollar':     '$',
    'hash':       '#',
    'percent':    '%',
    'ldots':      '…',
    'dots':       '…',
    'hellip':     '…',
    'smiley':     '☺',
    'frowny':     '☹',
    'checkmark':  '✓',
    'Rightarrow': '⇒',
    'Leftarrow':  '⇐',
    'leftarrow':  '←',
    'rightarrow': '→',
    'leftrightarrow': '↔',
    'Leftrightarrow': '⇔',
    'textbackslash':  '\\',
    'textbar':    '|',
    'textdegree': '°',
    'deg':        '°',
    'ell':        'ℓ',
    'infin':      '∞',
    'infty':      '∞',
    'neq':        '≠',
    'leq':        '≤',
    'geq':        '≥',
    'approx':     '≈',
    'pm':         '±',
    'mid':        '∣',
    'varepsilon': 'ε',
    'varphi':     'φ',
    'vartheta':   'ϑ',
    'varsigma':   'ς',
}


def expand_entity(name: str) -> Optional[str]:
    """Return the UTF-8 text for an entity name, or None if it is not an entity."""
    if name in ORG_ENTITIES:
        return ORG_ENTITIES[name]
    return html5.get(f'{name};')
