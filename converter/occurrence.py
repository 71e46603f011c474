# -*- coding: utf-8 -*-
"""
Occurrence ranges of profile elements.

Boomi profiles spell repetition in several ways: numeric minOccurs/maxOccurs,
"-1" or any negative number for an unbounded max, "unbounded" itself, and on
some exports boolean required/repeatable flags instead of numbers. Everything
here is normalized into an immutable OccurrenceRange; source nodes are only
read, never written back.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Union

from .dom import get_attr

logger = logging.getLogger(__name__)

UNBOUNDED = "unbounded"

# Recognized attribute spellings, highest priority first
MIN_OCCURS_KEYS = ('minOccurs', 'minOccurrence', 'min_occurs', 'min')
MAX_OCCURS_KEYS = ('maxOccurs', 'maxOccurrence', 'max_occurs', 'max')
REQUIRED_KEYS = ('required', 'isRequired', 'mandatory')
REPEATABLE_KEYS = ('repeatable', 'isRepeating', 'looping')


@dataclass(frozen=True)
class OccurrenceRange:
    min_occurs: int = 1
    max_occurs: Union[int, str] = 1

    @property
    def is_unbounded(self):
        return self.max_occurs == UNBOUNDED

    @property
    def is_optional(self):
        return self.min_occurs == 0

    def __str__(self):
        return f"[{self.min_occurs},{self.max_occurs}]"


def _parse_int(raw):
    try:
        return int(raw.strip())
    except (AttributeError, ValueError):
        return None


def normalize_min(raw):
    """
    Normalizes a source minOccurs value

    Args:
        raw (str|None): attribute value

    Returns:
        int: 1 when absent or unparseable, 0 for negative numbers
    """
    value = _parse_int(raw)
    if value is None:
        if raw is not None and raw.strip():
            logger.debug("minOccurs %r is not an integer, using 1", raw)
        return 1
    return max(value, 0)


def normalize_max(raw):
    """
    Normalizes a source maxOccurs value

    Args:
        raw (str|None): attribute value

    Returns:
        int|str: UNBOUNDED for "unbounded", "-1" or any negative number,
        the number itself when non-negative, 1 otherwise
    """
    if raw is not None and raw.strip().lower() == UNBOUNDED:
        return UNBOUNDED
    value = _parse_int(raw)
    if value is None:
        if raw is not None and raw.strip():
            logger.debug("maxOccurs %r is not an integer, using 1", raw)
        return 1
    if value < 0:
        return UNBOUNDED
    return value


def make_range(min_occurs, max_occurs):
    """Builds a range, promoting a finite max below min to UNBOUNDED"""
    if max_occurs != UNBOUNDED and max_occurs < min_occurs:
        logger.debug("maxOccurs %s below minOccurs %s, widened to unbounded", max_occurs, min_occurs)
        max_occurs = UNBOUNDED
    return OccurrenceRange(min_occurs, max_occurs)


def combine(a, b):
    """
    Combines the ranges of two declarations of the same element.
    Commutative, associative and idempotent.
    """
    min_occurs = min(a.min_occurs, b.min_occurs)
    if a.is_unbounded or b.is_unbounded:
        return OccurrenceRange(min_occurs, UNBOUNDED)
    return OccurrenceRange(min_occurs, max(a.max_occurs, b.max_occurs))


def combine_all(ranges: Iterable[OccurrenceRange]) -> OccurrenceRange:
    return reduce(combine, ranges)


def is_true(raw):
    return raw is not None and raw.strip().lower() == "true"


def is_required(node):
    return is_true(get_attr(node, *REQUIRED_KEYS))


def occurrence_of(node):
    """
    Reads the occurrence range of a profile element.

    Numeric keys win over flags: a required flag only stands in for a missing
    min, a repeatable flag only for a missing max.

    Args:
        node (etree.Element): <XMLElement> or equivalent

    Returns:
        OccurrenceRange
    """
    raw_min = get_attr(node, *MIN_OCCURS_KEYS)
    if raw_min is not None:
        min_occurs = normalize_min(raw_min)
    else:
        required = get_attr(node, *REQUIRED_KEYS)
        min_occurs = 1 if required is None or is_true(required) else 0

    raw_max = get_attr(node, *MAX_OCCURS_KEYS)
    if raw_max is not None:
        max_occurs = normalize_max(raw_max)
    elif is_true(get_attr(node, *REPEATABLE_KEYS)):
        max_occurs = UNBOUNDED
    else:
        max_occurs = 1

    return make_range(min_occurs, max_occurs)
