# ═════════════════════════════════════════════════════════════════════════════════
# NAME PARTICLE CATALOG
# ═════════════════════════════════════════════════════════════════════════════════
#
# Static tables consulted by the casing and splitting engine, in matching order:
# 1. PARTICLE_SEQUENCES: whole-word connectors that may open a family name
# 2. INTERIOR_CONNECTORS: whole-word connectors that only appear inside one
# 3. ATTACHED_PREFIXES: character-level prefixes glued to the following name
#
# Words are written in their display spelling. The engine derives lowercase,
# punctuation-canonical matching keys from them once per configuration.
# Within a culture, order does not matter: matching is longest sequence first.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Apostrophe class: ASCII apostrophe, right single quotation mark,
# modifier letter apostrophe, modifier letter turned comma
APOSTROPHES = "'’ʼʻ"

# Hyphen class: ASCII hyphen-minus, hyphen, non-breaking hyphen, en dash, em dash, Hebrew maqaf
HYPHENS = "-‐‑–—־"

# Layer 1: PARTICLE_SEQUENCES - connectors that may start a family name
PARTICLE_SEQUENCES = {
    "germanic": (
        "von",
        "von der",
        "von dem",
        "von den",
        "vom",
        "zu",
        "zum",
        "zur",
        "von und zu",
        "von zu",
    ),
    "dutch": (
        "van",
        "van de",
        "van der",
        "van den",
        "van het",
        "van 't",
        "van t",
        "in 't",
        "der",
        "den",
        "ter",
        "ten",
    ),
    "scandinavian": (
        "af",
        "av",
    ),
    "romance": (
        "de",
        "de la",
        "de las",
        "de los",
        "del",
        "della",
        "dei",
        "dello",
        "delle",
        "dal",
        "dalla",
        "dalle",
        "dagli",
        "degli",
        "di",
        "du",
        "des",
        "do",
        "dos",
        "da",
        "das",
    ),
    "irish": (
        "Ó",
        "O",
        "Ní",
        "Ni",
        "Nic",
        "Nic an",
        "Mac",
        "Mac an",
        "Mag",
        "Ua",
        "Uí",
        "Ui",
        "Mhic",
        "Bean Uí",
        "Bean Ui",
        "Bean Mhic",
    ),
    "arabic": (
        "al",
        "el",
        "ibn",
        "bin",
        "bint",
        "binti",
        "binte",
    ),
    "hebrew": (
        "ben",
        "bat",
        "mibeit",
        "mimishpachat",
    ),
    "welsh": (
        "ap",
        "ab",
        "ferch",
        "verch",
    ),
    "polynesian": ("Te",),
    "african": ("ka",),
}

# Layer 2: INTERIOR_CONNECTORS - conjunctions joining two family names ("Ortega y Gasset")
INTERIOR_CONNECTORS = {
    "spanish": ("y",),
    "portuguese": ("e",),
    "catalan": ("i",),
    "germanic": ("und",),
}

# Layer 3: ATTACHED_PREFIXES - glued to the next name without a space
# key: (display, culture, minimum remainder length, may open a family name in natural order)
ATTACHED_PREFIXES = {
    "mc": ("Mc", "scottish", 2, False),
    "m'": ("M'", "scottish", 2, False),
    "o'": ("O'", "irish", 1, False),
    "d'": ("d'", "romance", 1, True),
    "l'": ("l'", "romance", 1, True),
    "dell'": ("dell'", "italian", 1, True),
    "dall'": ("dall'", "italian", 1, True),
    "al-": ("al-", "arabic", 1, True),
    "el-": ("el-", "arabic", 1, True),
    "ut-": ("ut-", "arabic", 1, True),
    "ha-": ("ha-", "hebrew", 1, True),
    "v'": ("v'", "hebrew", 1, False),
}

# ═════════════════════════════════════════════════════════════════════════════════
# GAELIC "MAC" PATRONYMICS
# ═════════════════════════════════════════════════════════════════════════════════

# Surnames that look like Mac + name but are not capitalized as MacXxx
MAC_EXCEPTIONS = frozenset(
    {
        "macevicius",
        "machado",
        "machar",
        "machell",
        "machen",
        "machiel",
        "machin",
        "machlin",
        "machon",
        "macias",
        "macin",
        "maciol",
        "maciulis",
        "macken",
        "mackell",
        "mackey",
        "mackie",
        "mackintosh",
        "mackle",
        "macklem",
        "mackley",
        "macklin",
        "mackrell",
        "maclin",
        "macomber",
        "macquarie",
    }
)

# ═════════════════════════════════════════════════════════════════════════════════
# IRISH INITIAL MUTATIONS
# ═════════════════════════════════════════════════════════════════════════════════

# Lowercase letters prefixed to a capitalized name by eclipsis or h/t-prothesis ("hUiginn", "tSaoir")
MUTATION_PREFIXES = frozenset({"h", "t", "n", "bh", "bhf", "gc", "mb", "nd", "ng", "bp", "dt"})

# particle key: (mutation prefix, letters the prefix may stand before)
INITIAL_MUTATIONS = {
    "ó": ("h", "aeiouáéíóú"),
    "o": ("h", "aeiouáéíóú"),
    "ní": ("h", "aeiouáéíóú"),
    "ni": ("h", "aeiouáéíóú"),
    "ua": ("h", "aeiouáéíóú"),
    "uí": ("h", "aeiouáéíóú"),
    "ui": ("h", "aeiouáéíóú"),
    "bean uí": ("h", "aeiouáéíóú"),
    "bean ui": ("h", "aeiouáéíóú"),
    "mac an": ("t", "s"),
    "nic an": ("t", "s"),
}

# Uppercase letters whose default lowercase mapping adds a code point (Turkish dotted capital I)
LOWERCASE_OVERRIDES = {"\u0130": "i"}

# Unicode normalization forms accepted in place of a normalizer function
UNICODE_FORMS = frozenset({"NFC", "NFD", "NFKC", "NFKD"})

PARTICLE_SEQUENCES = MappingProxyType(PARTICLE_SEQUENCES)
INTERIOR_CONNECTORS = MappingProxyType(INTERIOR_CONNECTORS)
ATTACHED_PREFIXES = MappingProxyType(ATTACHED_PREFIXES)
INITIAL_MUTATIONS = MappingProxyType(INITIAL_MUTATIONS)
LOWERCASE_OVERRIDES = MappingProxyType(LOWERCASE_OVERRIDES)
