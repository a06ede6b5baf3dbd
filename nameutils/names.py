"""
Personal Name Casing and Splitting Module

This module normalizes the capitalization of personal names and infers the boundary between
given name(s) and family name across many naming conventions: European particles ("van der",
"de la"), Gaelic "Mac"/"Mc"/"O'", Irish Ó/Ní/Bean Uí forms, Arabic "al-"/"ibn"/"bint", Hebrew
"ben"/"bat"/"ha-", Welsh "ap"/"ferch", and Polynesian/African particles.

## Overview

Names arrive in one of two forms:

- **Unambiguous**: "Family, Given" - the comma marks the boundary, no heuristic needed
- **Natural order**: "Given Family" - the boundary is inferred from particles and case

The core functionality is provided by the `NameUtils` engine, which owns the exception
registries and the key normalization function:

1. **Trimming**: Collapse whitespace, normalize ", " and spacing around hyphens
2. **Key Normalization**: Lowercase, canonicalize apostrophe/hyphen variants, apply the
   pluggable Unicode normalizer
3. **Exception Lookup**: Caller-registered spellings and splits take precedence
4. **Particle Matching**: Longest-match lookup in the particle catalog
5. **Casing / Splitting**: Position-sensitive capitalization and given/family split

## Usage Examples

```python
from nameutils import namecase, namesplit, nameparts, namejoin, nametrim

namecase("MCADAM, SHAUN")           # "McAdam, Shaun"
namesplit("Bram van Haag")          # "van Haag, Bram"
nameparts("Smith, John Peter")      # ["Smith", "John Peter"]
nametrim("   Smith   ,  John   ")   # "Smith, John"
namejoin("van Haag", "Bram")        # "Bram van Haag"

# Exceptions for names the heuristic gets wrong
from nameutils import NameUtils

engine = NameUtils()
engine.namesplit_exception("Assis de Queiroz, Vinicius")
engine.namesplit("Vinicius Assis de Queiroz")   # "Assis de Queiroz, Vinicius"
engine.namecase_exception("D'Angelo")
engine.namecase("d'angelo, maria")              # "D'Angelo, Maria"

# Unicode-normalization-aware matching
engine.normalize("NFC")
```

## Case Signal

In natural-order input, the case of a word is the deciding signal between a particle and an
ordinary word: "Bram van Haag" splits before "van", "Martin Van Buren" splits before "Buren".
The first word is never a particle ("Van Morrison"). Input written entirely in upper or lower
case carries no signal, so every catalogued particle counts.

## Known Limitations

The split is a heuristic. Hebrew "ben" names, connectors such as "Ortega y Gasset" and
particles the catalog lacks ("Jonsson til Sudreim") need a split exception. Italian and
Anglo-American capitalized particles ("De Luca", "Van Buren") need a case exception.

## Thread Safety

An engine performs no locking. Registries and the normalizer are per-engine state: callers
sharing one engine across threads must serialize registration. Separate engines share nothing.
"""

from __future__ import annotations

import functools
import logging
import re
import unicodedata
from dataclasses import dataclass, replace
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from nameutils.names_data import (
    APOSTROPHES,
    HYPHENS,
    PARTICLE_SEQUENCES,
    INTERIOR_CONNECTORS,
    ATTACHED_PREFIXES,
    MAC_EXCEPTIONS,
    MUTATION_PREFIXES,
    INITIAL_MUTATIONS,
    LOWERCASE_OVERRIDES,
    UNICODE_FORMS,
)


# ════════════════════════════════════════════════════════════════════════════════
# COMPILED REGEX PATTERNS
# ════════════════════════════════════════════════════════════════════════════════

_HYPHEN_CLASS = "[" + re.escape(HYPHENS) + "]"

_WHITESPACE_PATTERN = r"\s+"
_SEPARATOR_PATTERN = r"\s*,\s*"
_HYPHEN_SPACING_PATTERN = rf"\s*({_HYPHEN_CLASS})\s*"
_HYPHEN_SPLIT_PATTERN = rf"({_HYPHEN_CLASS})"
# Mac + at least three letters, not ending in a letter that usually marks a non-Gaelic name
_MAC_PATRONYMIC_PATTERN = r"mac[a-z]{2,}[^aciozj\W]"

_LOWERCASE_TR = str.maketrans(dict(LOWERCASE_OVERRIDES))

Normalizer = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def _lower(text: str) -> str:
    """Lowercase without the combining dot Python adds for "\u0130"."""
    return text.translate(_LOWERCASE_TR).lower()


# ════════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SplitResult:
    """Result of a given/family split - Either-like structure."""

    success: bool
    name: Optional[str]
    family: str = ""
    given: str = ""
    source: str = ""
    error_message: Optional[str] = None

    @classmethod
    def success_with_parts(cls, name: str, family: str, given: str, source: str) -> "SplitResult":
        return cls(success=True, name=name, family=family, given=given, source=source)

    @classmethod
    def failure(cls, name: Optional[str], error_message: str) -> "SplitResult":
        return cls(success=False, name=name, error_message=error_message)

    def map(self, f: Callable[[str, str], Tuple[str, str]]) -> "SplitResult":
        """Transform (family, given) of a successful split."""
        if self.success:
            family, given = f(self.family, self.given)
            return replace(self, family=family, given=given)
        return self

    @property
    def unambiguous(self) -> Optional[str]:
        """"Family, Given" on success, otherwise the trimmed input unchanged."""
        if self.success:
            return f"{self.family}, {self.given}"
        return self.name

    @property
    def parts(self) -> List[str]:
        if self.success:
            return [self.family, self.given]
        return [self.name] if self.name else []


@dataclass(frozen=True)
class NameToken:
    """One whitespace-delimited word of a trimmed name, with its catalog key."""

    text: str
    key: str
    index: int


@dataclass(frozen=True)
class RegistryInfo:
    """Immutable snapshot of an engine's exception registries."""

    case_exceptions: int
    split_exceptions: int
    normalization: str


# ════════════════════════════════════════════════════════════════════════════════
# PARTICLE CATALOG
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ParticleRule:
    """A connector word sequence that may open or sit inside a family name."""

    words: Tuple[str, ...]  # matching keys: lowercase, punctuation-canonical, NFC
    display: Tuple[str, ...]  # spelling used in output
    culture: str
    leading: bool = True
    requires_capital: bool = True

    @property
    def key(self) -> str:
        return " ".join(self.words)

    def __len__(self) -> int:
        return len(self.words)


@dataclass(frozen=True)
class AttachedPrefix:
    """A prefix glued to the following name without a space ("Mc", "O'", "al-")."""

    key: str
    display: str
    culture: str
    min_rest: int = 1
    leading: bool = False

    def render(self, original: str) -> str:
        """Display spelling, keeping the caller's apostrophe and hyphen characters."""
        return "".join(
            source if canonical in "'-" else shown
            for shown, source, canonical in zip(self.display, original, self.key)
        )


class ParticleTable:
    """Longest-match lookup over particle word sequences."""

    def __init__(self, rules: Iterable[ParticleRule]):
        self._rules: Dict[Tuple[str, ...], ParticleRule] = {}
        for rule in rules:
            # First catalog entry wins for words shared between cultures ("von")
            self._rules.setdefault(rule.words, rule)
        self._max_length = max((len(words) for words in self._rules), default=0)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ParticleRule]:
        return iter(self._rules.values())

    def candidates(self, keys: Sequence[str], start: int) -> Iterator[ParticleRule]:
        """Yield the rules matching keys[start:], longest first."""
        longest = min(self._max_length, len(keys) - start)
        for length in range(longest, 0, -1):
            rule = self._rules.get(tuple(keys[start : start + length]))
            if rule is not None:
                yield rule


def _particle_rule(sequence: str, culture: str, leading: bool, punctuation_tr: Dict[int, str]) -> ParticleRule:
    display = tuple(sequence.split())
    words = tuple(unicodedata.normalize("NFC", _lower(word).translate(punctuation_tr)) for word in display)
    return ParticleRule(words=words, display=display, culture=culture, leading=leading)


def _compile_particle_rules(punctuation_tr: Dict[int, str]) -> Tuple[ParticleRule, ...]:
    rules = [
        _particle_rule(sequence, culture, True, punctuation_tr)
        for culture, sequences in PARTICLE_SEQUENCES.items()
        for sequence in sequences
    ]
    rules.extend(
        _particle_rule(sequence, culture, False, punctuation_tr)
        for culture, sequences in INTERIOR_CONNECTORS.items()
        for sequence in sequences
    )
    return tuple(rules)


def _sort_prefixes(prefixes: Iterable[AttachedPrefix]) -> Tuple[AttachedPrefix, ...]:
    return tuple(sorted(prefixes, key=lambda prefix: len(prefix.key), reverse=True))


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NameUtilsConfig:
    """Immutable configuration containing the compiled catalog and patterns."""

    # Unambiguous-form separator as written in output
    separator: str

    # Precompiled regex patterns (immutable)
    whitespace_pattern: re.Pattern[str]
    separator_pattern: re.Pattern[str]
    hyphen_spacing_pattern: re.Pattern[str]
    hyphen_split_pattern: re.Pattern[str]
    mac_pattern: re.Pattern[str]

    # Apostrophe and hyphen classes onto "'" and "-"
    punctuation_tr: Dict[int, str]

    # Particle catalog
    particle_table: ParticleTable
    attached_prefixes: Tuple[AttachedPrefix, ...]  # longest first
    mac_exceptions: FrozenSet[str]
    mutation_prefixes: Tuple[str, ...]  # longest first
    initial_mutations: Mapping[str, Tuple[str, str]]

    @classmethod
    def create_default(cls) -> "NameUtilsConfig":
        """Factory method to create the default configuration."""
        punctuation_tr = str.maketrans({**{c: "'" for c in APOSTROPHES}, **{c: "-" for c in HYPHENS}})

        return cls(
            separator=", ",
            whitespace_pattern=re.compile(_WHITESPACE_PATTERN),
            separator_pattern=re.compile(_SEPARATOR_PATTERN),
            hyphen_spacing_pattern=re.compile(_HYPHEN_SPACING_PATTERN),
            hyphen_split_pattern=re.compile(_HYPHEN_SPLIT_PATTERN),
            mac_pattern=re.compile(_MAC_PATRONYMIC_PATTERN),
            punctuation_tr=punctuation_tr,
            particle_table=ParticleTable(_compile_particle_rules(punctuation_tr)),
            attached_prefixes=_sort_prefixes(
                AttachedPrefix(key=key, display=display, culture=culture, min_rest=min_rest, leading=leading)
                for key, (display, culture, min_rest, leading) in ATTACHED_PREFIXES.items()
            ),
            mac_exceptions=MAC_EXCEPTIONS,
            mutation_prefixes=tuple(sorted(MUTATION_PREFIXES, key=len, reverse=True)),
            initial_mutations=INITIAL_MUTATIONS,
        )

    def with_particle_rules(self, rules: Iterable[ParticleRule]) -> "NameUtilsConfig":
        """Immutable update method replacing the particle catalog."""
        return replace(self, particle_table=ParticleTable(rules))

    def with_attached_prefixes(self, prefixes: Iterable[AttachedPrefix]) -> "NameUtilsConfig":
        """Immutable update method replacing the attached prefixes."""
        return replace(self, attached_prefixes=_sort_prefixes(prefixes))


# ════════════════════════════════════════════════════════════════════════════════
# KEY NORMALIZATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


class KeyNormalizer:
    """Builds the lookup keys shared by exception registration and lookup."""

    def __init__(self, config: NameUtilsConfig):
        self._config = config
        self._normalizer: Normalizer = _identity
        self._form = "identity"

    @property
    def normalization(self) -> str:
        return self._form

    def set_normalizer(self, normalizer: Union[Normalizer, str, None]) -> Normalizer:
        """
        Install the Unicode normalization applied to keys and return the previous one.

        Accepts a callable, a form name ("NFC", "NFD", "NFKC", "NFKD") or None for identity.
        Keys already registered are not renormalized.
        """
        previous = self._normalizer
        if normalizer is None:
            self._normalizer, self._form = _identity, "identity"
        elif isinstance(normalizer, str):
            form = normalizer.upper()
            if form not in UNICODE_FORMS:
                raise ValueError(f"Unknown Unicode normalization form: {normalizer!r}")
            unicode_form = functools.partial(unicodedata.normalize, form)  # type: ignore[arg-type]
            self._normalizer, self._form = unicode_form, form
        elif callable(normalizer):
            self._normalizer, self._form = normalizer, getattr(normalizer, "__name__", "custom")
        else:
            raise TypeError(f"Normalizer must be callable, a form name or None, not {type(normalizer).__name__}")

        logging.debug(f"Name key normalization set to {self._form}")
        return previous

    def canonical_punctuation(self, text: str) -> str:
        """Map every apostrophe-class and hyphen-class code point onto "'" and "-"."""
        return text.translate(self._config.punctuation_tr)

    def key(self, text: str) -> str:
        """Registry key: lowercase, punctuation-canonical, then the active normalizer."""
        return self._normalizer(self.canonical_punctuation(_lower(text)))

    def particle_key(self, text: str) -> str:
        """Catalog key. Independent of the active normalizer since the catalog is fixed NFC text."""
        return unicodedata.normalize("NFC", self.canonical_punctuation(_lower(text)))


# ════════════════════════════════════════════════════════════════════════════════
# EXCEPTION REGISTRIES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FamilyOnly:
    """Generic family-name exception, applied with any given name or none."""

    family: str


@dataclass(frozen=True)
class FullName:
    """Whole-name exception, keyed in unambiguous or natural order."""

    name: str


@dataclass(frozen=True)
class FamilyWithGiven:
    """Family spelling taken from a full-name exception. given=None matches any given name."""

    family: str
    given: Optional[str] = None


ExceptionKey = Union[FamilyOnly, FullName, FamilyWithGiven]


class CaseExceptionRegistry:
    """Irregular capitalizations of family names and full names. Last registration wins."""

    def __init__(self, normalizer: KeyNormalizer):
        self._normalizer = normalizer
        self._entries: Dict[ExceptionKey, str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def add_family(self, family: str) -> None:
        self._entries[FamilyOnly(self._normalizer.key(family))] = family

    def add_full_name(self, family: str, given: str, separator: str) -> None:
        key = self._normalizer.key
        unambiguous = f"{family}{separator}{given}"
        natural = f"{given} {family}"

        self._entries[FullName(key(unambiguous))] = unambiguous
        self._entries[FullName(key(natural))] = natural
        self._entries[FamilyWithGiven(key(family), key(given))] = family
        self._entries[FamilyWithGiven(key(family))] = family

    def full_name(self, name: str) -> Optional[str]:
        return self._entries.get(FullName(self._normalizer.key(name)))

    def family(self, family: str, given: Optional[str] = None) -> Optional[str]:
        """
        Registered spelling of a family name.

        Precedence with a given name: exact full-name pairing, generic family exception,
        family seen in any full-name exception. Without one: generic family exception only.
        """
        family_key = self._normalizer.key(family)
        if given:
            found = self._entries.get(FamilyWithGiven(family_key, self._normalizer.key(given)))
            if found is not None:
                return found

        found = self._entries.get(FamilyOnly(family_key))
        if found is not None or not given:
            return found

        return self._entries.get(FamilyWithGiven(family_key))


class SplitExceptionRegistry:
    """Given/family boundaries the heuristic cannot derive, keyed by natural order."""

    def __init__(self, normalizer: KeyNormalizer):
        self._normalizer = normalizer
        self._entries: Dict[FullName, str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def add(self, family: str, given: str, separator: str) -> None:
        self._entries[FullName(self._normalizer.key(f"{given} {family}"))] = f"{family}{separator}{given}"

    def lookup(self, name: str) -> Optional[str]:
        return self._entries.get(FullName(self._normalizer.key(name)))


# ════════════════════════════════════════════════════════════════════════════════
# WORD-LEVEL HELPERS
# ════════════════════════════════════════════════════════════════════════════════


def _capitalize(word: str) -> str:
    """Uppercase the first letter, lowercase everything else."""
    lowered = _lower(word)
    for index, char in enumerate(lowered):
        if char.isalpha():
            upper = char.upper()
            # Letters like "ß" have no single-character uppercase
            if len(upper) != 1:
                upper = char
            return lowered[:index] + upper + lowered[index + 1 :]
    return lowered


def _first_letter(text: str) -> Optional[str]:
    return next((char for char in text if char.isalpha()), None)


def _starts_upper(text: str) -> bool:
    letter = _first_letter(text)
    return letter is not None and letter.isupper()


def _has_case_signal(text: str) -> bool:
    return text != text.lower() and text != text.upper()


# ════════════════════════════════════════════════════════════════════════════════
# MAIN NAME ENGINE CLASS
# ════════════════════════════════════════════════════════════════════════════════


class NameUtils:
    """Name casing and given/family splitting engine."""

    def __init__(self, config: Optional[NameUtilsConfig] = None):
        self._config = config or NameUtilsConfig.create_default()
        self._normalizer = KeyNormalizer(self._config)
        self._case_exceptions = CaseExceptionRegistry(self._normalizer)
        self._split_exceptions = SplitExceptionRegistry(self._normalizer)

    # Public API methods
    def normalize(self, normalizer: Union[Normalizer, str, None]) -> Normalizer:
        """Install the Unicode normalization used for exception keys, returning the previous one."""
        return self._normalizer.set_normalizer(normalizer)

    def get_registry_info(self) -> RegistryInfo:
        return RegistryInfo(
            case_exceptions=len(self._case_exceptions),
            split_exceptions=len(self._split_exceptions),
            normalization=self._normalizer.normalization,
        )

    def clear_exceptions(self) -> None:
        """Forget every registered case and split exception."""
        self._case_exceptions.clear()
        self._split_exceptions.clear()

    def nametrim(self, name: Optional[str]) -> Optional[str]:
        """Collapse whitespace, write the separator as ", " and drop spaces around hyphens."""
        if name is None:
            return None
        name = self._config.whitespace_pattern.sub(" ", name).strip()
        # Separator last so a hyphen next to the comma cannot eat its space
        name = self._config.hyphen_spacing_pattern.sub(r"\1", name)
        name = self._config.separator_pattern.sub(self._config.separator, name)
        return name.strip()

    def namejoin(self, family: Optional[str], given: Optional[str]) -> Optional[str]:
        """Compose natural order "given family"."""
        if family is None:
            return given
        if given is None:
            return family
        return " ".join(part for part in (given, family) if part)

    def namecase(self, name: Optional[str], mode: str = "full") -> Optional[str]:
        """
        Canonical capitalization of a name.

        mode "full" accepts "Family, Given", natural order "Given Family" or a bare family name.
        "family" and "given" restrict the input to one component (see fnamecase, gnamecase).
        """
        if mode == "family":
            return self.fnamecase(name)
        if mode == "given":
            return self.gnamecase(name)
        if mode != "full":
            raise ValueError(f"Unknown namecase mode: {mode!r}")

        name = self.nametrim(name)
        if not name:
            return name
        if "," in name:
            return self._case_unambiguous(name)
        return self._case_natural(name)

    def gnamecase(self, given: Optional[str]) -> Optional[str]:
        """Capitalize given name(s). No particle or exception logic applies."""
        given = self.nametrim(given)
        if not given:
            return given
        return " ".join(self._case_word(token, family=False) for token in given.split(" "))

    def fnamecase(self, family: Optional[str], given: Optional[str] = None) -> Optional[str]:
        """
        Capitalize a family name.

        The optional given name only selects between case exceptions registered for the
        same family name with different given names.
        """
        family = self.nametrim(family)
        if not family:
            return family
        return self._case_family(family, self.nametrim(given))

    def split(self, name: Optional[str]) -> SplitResult:
        """
        Main API method: split a name into family and given parts.

        Returns SplitResult with:
        - success=True, family/given cased, source naming the deciding rule
        - success=False, error_message=reason, name=trimmed input
        """
        name = self.nametrim(name)
        if name is None:
            return SplitResult.failure(None, "no name")
        if not name:
            return SplitResult.failure(name, "empty name")
        if "," in name:
            return self._split_unambiguous(name)

        registered = self._split_exceptions.lookup(name)
        if registered is not None:
            family, _, given = registered.partition(",")
            return SplitResult.success_with_parts(name, family.strip(), given.strip(), "exception")

        tokens = name.split(" ")
        if len(tokens) == 1:
            return SplitResult.failure(name, "single token")

        start, source = self._family_start(self._tokens(tokens))
        parsed = SplitResult.success_with_parts(name, " ".join(tokens[start:]), " ".join(tokens[:start]), source)
        return parsed.map(self._case_parts)

    def namesplit(self, name: Optional[str]) -> Optional[str]:
        """Unambiguous "Family, Given" form. Unsplittable input comes back trimmed but unchanged."""
        return self.split(name).unambiguous

    def nameparts(self, name: Optional[str]) -> List[str]:
        """[family, given], [name] for an unsplittable name, [] for no name."""
        return self.split(name).parts

    def namecase_exception(self, *names: Optional[str]) -> int:
        """
        Register case exceptions, returning how many were registered.

        "Family, Given" registers a full name, a bare name a family name applied with any given name.
        """
        count = 0
        for name in names:
            name = self.nametrim(name)
            if not name:
                continue

            if "," not in name:
                self._case_exceptions.add_family(name)
                count += 1
                continue

            family, given = self._unambiguous_parts(name)
            if not family or not given:
                logging.warning(f"Ignoring case exception without family or given name: {name!r}")
                continue
            self._case_exceptions.add_full_name(family, given, self._config.separator)
            count += 1
        return count

    def namesplit_exception(self, *names: Optional[str]) -> int:
        """Register split exceptions written as "Family, Given", returning how many were registered."""
        count = 0
        for name in names:
            name = self.nametrim(name)
            if not name:
                continue

            family, given = self._unambiguous_parts(name)
            if not family or not given:
                logging.warning(f"Ignoring split exception not in 'Family, Given' form: {name!r}")
                continue
            self._split_exceptions.add(family, given, self._config.separator)
            count += 1
        return count

    # Casing
    def _case_unambiguous(self, name: str) -> str:
        registered = self._case_exceptions.full_name(name)
        if registered is not None:
            return registered

        family, given = self._unambiguous_parts(name)
        cased_given = self.gnamecase(given) or ""
        return self.nametrim(f"{self._case_family(family, given)}{self._config.separator}{cased_given}") or ""

    def _case_natural(self, name: str) -> str:
        registered = self._case_exceptions.full_name(name)
        if registered is not None:
            return registered

        tokens = name.split(" ")
        if len(tokens) == 1:
            return self._case_family(name)

        # A trailing run of words registered as a family name
        for start in range(1, len(tokens)):
            given = " ".join(tokens[:start])
            registered = self._case_exceptions.family(" ".join(tokens[start:]), given)
            if registered is not None:
                return f"{self.gnamecase(given)} {registered}"

        return f"{self.gnamecase(tokens[0])} {self._case_family_tokens(tokens[1:], in_family=False)}"

    def _case_family(self, family: str, given: Optional[str] = None) -> str:
        if not family:
            return family
        registered = self._case_exceptions.family(family, given)
        if registered is not None:
            return registered
        return self._case_family_tokens(family.split(" "))

    def _case_family_tokens(self, words: List[str], in_family: bool = True) -> str:
        """
        Case the words of a family name, or of everything after the first given name.

        in_family=False means the family boundary is unknown: connectors that only occur
        inside a family name ("y", "e") count once a leading particle has been seen.
        """
        tokens = self._tokens(words)
        keys = [token.key for token in tokens]
        cased: List[str] = []
        index = 0

        while index < len(tokens):
            rule = self._family_particle(keys, index, in_family)
            if rule is None:
                cased.append(self._case_word(tokens[index].text, family=True))
                index += 1
                continue

            end = index + len(rule)
            cased.extend(self._render_particle(rule, [token.text for token in tokens[index:end]]))
            index, in_family = end, True

            mutation = self._config.initial_mutations.get(rule.key)
            if mutation is not None:
                cased.append(self._case_mutated(tokens[index].text, mutation))
                index += 1

        return " ".join(cased)

    def _family_particle(self, keys: List[str], index: int, in_family: bool) -> Optional[ParticleRule]:
        for rule in self._config.particle_table.candidates(keys, index):
            # A particle needs a name after it
            if index + len(rule) >= len(keys):
                continue
            if rule.leading or (in_family and index > 0):
                return rule
        return None

    def _render_particle(self, rule: ParticleRule, tokens: List[str]) -> List[str]:
        rendered = []
        for shown, original in zip(rule.display, tokens):
            if len(shown) != len(original):
                rendered.append(shown)
                continue
            canonical = self._normalizer.canonical_punctuation(shown)
            rendered.append(
                "".join(
                    source if char in "'-" else char_shown
                    for char_shown, source, char in zip(shown, original, canonical)
                )
            )
        return rendered

    def _case_mutated(self, word: str, mutation: Tuple[str, str]) -> str:
        """Irish h- and t-prothesis keep the prefix lowercase: "Ó hUiginn", "Mac an tSaoir"."""
        prefix, letters = mutation
        lowered = _lower(word)
        size = len(prefix)
        if len(lowered) > size and lowered.startswith(prefix) and lowered[size] in letters:
            return lowered[:size] + self._case_word(word[size:], family=True, lookup=False)
        return self._case_word(word, family=True)

    def _case_word(self, word: str, family: bool, lookup: bool = True) -> str:
        """
        Capitalize one whitespace-delimited word.

        Family words honour registered family exceptions and attached prefixes. Hyphen-joined
        segments are capitalized independently; after any other apostrophe letters stay lowercase.
        """
        if not word:
            return word

        if family and lookup:
            registered = self._case_exceptions.family(word)
            if registered is not None:
                return registered

        canonical = self._normalizer.canonical_punctuation(_lower(word))
        if family:
            prefix = self._attached_prefix(canonical)
            if prefix is not None:
                size = len(prefix.key)
                return prefix.render(word[:size]) + self._case_word(word[size:], family, lookup=False)
            if self._is_mac_patronymic(canonical):
                return "Mac" + self._case_word(word[3:], family, lookup=False)

        parts = self._config.hyphen_split_pattern.split(word)
        if len(parts) > 1:
            # Odd positions hold the captured hyphen characters
            return "".join(part if index % 2 else self._case_word(part, family) for index, part in enumerate(parts))

        return _capitalize(word)

    def _attached_prefix(self, canonical: str) -> Optional[AttachedPrefix]:
        for prefix in self._config.attached_prefixes:
            size = len(prefix.key)
            if (
                canonical.startswith(prefix.key)
                and len(canonical) - size >= prefix.min_rest
                and canonical[size].isalpha()
            ):
                return prefix
        return None

    def _is_mac_patronymic(self, canonical: str) -> bool:
        return bool(self._config.mac_pattern.fullmatch(canonical)) and canonical not in self._config.mac_exceptions

    # Splitting
    def _split_unambiguous(self, name: str) -> SplitResult:
        family, given = self._unambiguous_parts(name)
        if not family or not given:
            return SplitResult.failure(name, "missing family or given name")

        cased_family, cased_given = self._unambiguous_parts(self._case_unambiguous(name))
        return SplitResult.success_with_parts(name, cased_family, cased_given, "unambiguous")

    def _tokens(self, words: Sequence[str]) -> List[NameToken]:
        return [NameToken(text=word, key=self._normalizer.particle_key(word), index=i) for i, word in enumerate(words)]

    def _unambiguous_parts(self, name: str) -> Tuple[str, str]:
        family, _, given = name.partition(",")
        # Repeated separators ("Smith,, John") leave no comma in either part
        return family.strip(" ,"), given.strip(" ,")

    def _case_parts(self, family: str, given: str) -> Tuple[str, str]:
        return self._case_family(family, given), self.gnamecase(given) or ""

    def _family_start(self, tokens: List[NameToken]) -> Tuple[int, str]:
        """
        Index of the first family-name token and the rule that decided it.

        The given name is the longest leading run of words that do not open a particle chain.
        Without any particle the last word is the family name.
        """
        caseless = not _has_case_signal(" ".join(token.text for token in tokens))
        keys = [token.key for token in tokens]

        for token in tokens[1:]:
            if self._opens_particle_chain(tokens, keys, token.index, caseless):
                return token.index, "particle"
            if self._opens_with_prefix(token, caseless):
                return token.index, "attached-prefix"

        return tokens[-1].index, "last-token"

    def _opens_particle_chain(self, tokens: List[NameToken], keys: List[str], index: int, caseless: bool) -> bool:
        for rule in self._config.particle_table.candidates(keys, index):
            end = index + len(rule)
            if not rule.leading or end >= len(tokens):
                continue
            if caseless:
                return True
            # "van" must be written lowercase, "Ó" capitalized
            if any(
                _starts_upper(token.text) != _starts_upper(shown)
                for token, shown in zip(tokens[index:end], rule.display)
            ):
                continue
            if not rule.requires_capital or self._is_continuation(tokens, keys, end):
                return True
        return False

    def _is_continuation(self, tokens: List[NameToken], keys: List[str], index: int) -> bool:
        """A capitalized word, or another particle such as "al-" after "bin"."""
        token = tokens[index]
        if self._is_capitalized(token.text):
            return True
        if next(self._config.particle_table.candidates(keys, index), None) is not None:
            return True
        return self._attached_prefix(token.key) is not None

    def _opens_with_prefix(self, token: NameToken, caseless: bool) -> bool:
        prefix = self._attached_prefix(token.key)
        if prefix is None or not prefix.leading:
            return False
        if caseless:
            return True
        return not _starts_upper(token.text) and self._is_capitalized(token.text[len(prefix.key) :])

    def _is_capitalized(self, token: str) -> bool:
        if _starts_upper(token):
            return True
        # Irish mutations put lowercase letters before the capital: "hUiginn", "tSaoir"
        lowered = _lower(token)
        for prefix in self._config.mutation_prefixes:
            size = len(prefix)
            if lowered.startswith(prefix) and len(token) > size and token[:size].islower() and token[size].isupper():
                return True
        return False


# ════════════════════════════════════════════════════════════════════════════════
# PERFORMANCE CHECK
# ════════════════════════════════════════════════════════════════════════════════


def run_performance_test() -> None:
    """Time casing and splitting over generated names."""
    import random
    import time

    engine = NameUtils()

    given_names = ["John", "Mary", "Bram", "Seán", "Máire", "Yosef", "Harun", "Dafydd", "Kiri", "Ana", "Jean-Luc"]
    family_names = ["Smith", "Haag", "Súilleabháin", "Avraham", "Rashid", "Gruffydd", "Kanawa", "Santos", "Adam"]
    particles = ["", "", "van", "van der", "de la", "Ó", "ben", "ibn", "ap", "Te", "dos", "von und zu"]

    def generate_test_names(count: int) -> List[str]:
        names = []
        for _ in range(count):
            parts = [random.choice(given_names), random.choice(particles), random.choice(family_names)]
            name = " ".join(part for part in parts if part)
            choice = random.random()
            if choice < 0.2:
                name = name.upper()
            elif choice < 0.4:
                name = name.lower()
            names.append(name)
        return names

    test_names = generate_test_names(10000)

    print(f"Testing with {len(test_names)} generated names...")
    for label, operation in (("namecase", engine.namecase), ("namesplit", engine.namesplit)):
        start = time.perf_counter()
        for name in test_names:
            operation(name)
        elapsed = time.perf_counter() - start

        rate = len(test_names) / elapsed
        time_per_name = (elapsed / len(test_names)) * 1_000_000
        print(f"{label}: {len(test_names)} names in {elapsed:.3f}s")
        print(f"Rate: {rate:.0f} names/second ({time_per_name:.1f} μs/name)")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global engine instance for module-level functions
_global_engine: Optional[NameUtils] = None


def _get_global_engine() -> NameUtils:
    """Get or create the global engine instance."""
    global _global_engine
    if _global_engine is None:
        _global_engine = NameUtils()
    return _global_engine


def nametrim(name: Optional[str]) -> Optional[str]:
    return _get_global_engine().nametrim(name)


def namecase(name: Optional[str], mode: str = "full") -> Optional[str]:
    return _get_global_engine().namecase(name, mode)


def gnamecase(given: Optional[str]) -> Optional[str]:
    return _get_global_engine().gnamecase(given)


def fnamecase(family: Optional[str], given: Optional[str] = None) -> Optional[str]:
    return _get_global_engine().fnamecase(family, given)


def namesplit(name: Optional[str]) -> Optional[str]:
    return _get_global_engine().namesplit(name)


def nameparts(name: Optional[str]) -> List[str]:
    return _get_global_engine().nameparts(name)


def namejoin(family: Optional[str], given: Optional[str]) -> Optional[str]:
    return _get_global_engine().namejoin(family, given)


def namecase_exception(*names: Optional[str]) -> int:
    return _get_global_engine().namecase_exception(*names)


def namesplit_exception(*names: Optional[str]) -> int:
    return _get_global_engine().namesplit_exception(*names)


def normalize(normalizer: Union[Normalizer, str, None]) -> Normalizer:
    """Install the key normalizer of the global engine, returning the previous one."""
    return _get_global_engine().normalize(normalizer)


def clear_exceptions() -> None:
    """Clear the global engine's case and split exceptions."""
    _get_global_engine().clear_exceptions()


def get_registry_info() -> Dict[str, Union[int, str]]:
    """Get registry information as a dictionary."""
    info = _get_global_engine().get_registry_info()
    return {
        "case_exceptions": info.case_exceptions,
        "split_exceptions": info.split_exceptions,
        "normalization": info.normalization,
    }


# CLI entry point
if __name__ == "__main__":
    run_performance_test()
