"""Mapping of axe-core rule IDs to WCAG 2.x success criteria and Section 508 provisions.

Based on the axe-core rule descriptions:
https://github.com/dequelabs/axe-core/blob/develop/doc/rule-descriptions.md

The tables are built once at import and exposed read-only, so they can be
shared between concurrent audits without locking.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .models.reports import WcagCriterion


@dataclass(slots=True, frozen=True)
class RuleMapping:
    """Standards references for one axe-core rule."""

    wcag: Tuple[str, ...]
    section508: Tuple[str, ...]


def _criteria(*rows: Tuple[str, str, str]) -> Mapping[str, WcagCriterion]:
    return MappingProxyType({
        criterion_id: WcagCriterion(id=criterion_id, level=level, title=title)
        for criterion_id, level, title in rows
    })


def _rules(rows: dict) -> Mapping[str, RuleMapping]:
    return MappingProxyType({
        rule_id: RuleMapping(wcag=tuple(wcag), section508=tuple(s508))
        for rule_id, (wcag, s508) in rows.items()
    })


# WCAG success criteria tracked by the scorecard
WCAG_CRITERIA: Mapping[str, WcagCriterion] = _criteria(
    ('1.1.1', 'A', 'Non-text Content'),
    ('1.2.1', 'A', 'Audio-only and Video-only (Prerecorded)'),
    ('1.2.2', 'A', 'Captions (Prerecorded)'),
    ('1.2.3', 'A', 'Audio Description or Media Alternative (Prerecorded)'),
    ('1.2.4', 'AA', 'Captions (Live)'),
    ('1.2.5', 'AA', 'Audio Description (Prerecorded)'),
    ('1.3.1', 'A', 'Info and Relationships'),
    ('1.3.2', 'A', 'Meaningful Sequence'),
    ('1.3.3', 'A', 'Sensory Characteristics'),
    ('1.3.4', 'AA', 'Orientation'),
    ('1.3.5', 'AA', 'Identify Input Purpose'),
    ('1.4.1', 'A', 'Use of Color'),
    ('1.4.2', 'A', 'Audio Control'),
    ('1.4.3', 'AA', 'Contrast (Minimum)'),
    ('1.4.4', 'AA', 'Resize Text'),
    ('1.4.5', 'AA', 'Images of Text'),
    ('1.4.10', 'AA', 'Reflow'),
    ('1.4.11', 'AA', 'Non-text Contrast'),
    ('1.4.12', 'AA', 'Text Spacing'),
    ('1.4.13', 'AA', 'Content on Hover or Focus'),
    ('2.1.1', 'A', 'Keyboard'),
    ('2.1.2', 'A', 'No Keyboard Trap'),
    ('2.1.4', 'A', 'Character Key Shortcuts'),
    ('2.2.1', 'A', 'Timing Adjustable'),
    ('2.2.2', 'A', 'Pause, Stop, Hide'),
    ('2.3.1', 'A', 'Three Flashes or Below Threshold'),
    ('2.4.1', 'A', 'Bypass Blocks'),
    ('2.4.2', 'A', 'Page Titled'),
    ('2.4.3', 'A', 'Focus Order'),
    ('2.4.4', 'A', 'Link Purpose (In Context)'),
    ('2.4.5', 'AA', 'Multiple Ways'),
    ('2.4.6', 'AA', 'Headings and Labels'),
    ('2.4.7', 'AA', 'Focus Visible'),
    ('2.5.1', 'A', 'Pointer Gestures'),
    ('2.5.2', 'A', 'Pointer Cancellation'),
    ('2.5.3', 'A', 'Label in Name'),
    ('2.5.4', 'A', 'Motion Actuation'),
    ('3.1.1', 'A', 'Language of Page'),
    ('3.1.2', 'AA', 'Language of Parts'),
    ('3.2.1', 'A', 'On Focus'),
    ('3.2.2', 'A', 'On Input'),
    ('3.2.3', 'AA', 'Consistent Navigation'),
    ('3.2.4', 'AA', 'Consistent Identification'),
    ('3.3.1', 'A', 'Error Identification'),
    ('3.3.2', 'A', 'Labels or Instructions'),
    ('3.3.3', 'AA', 'Error Suggestion'),
    ('3.3.4', 'AA', 'Error Prevention (Legal, Financial, Data)'),
    ('4.1.1', 'A', 'Parsing'),
    ('4.1.2', 'A', 'Name, Role, Value'),
    ('4.1.3', 'AA', 'Status Messages'),
)

# Section 508 provisions (1194.22 - Web-based Intranet and Internet Information)
SECTION_508_PROVISIONS: Mapping[str, str] = MappingProxyType({
    '(a)': 'Text equivalent for non-text elements',
    '(b)': 'Multimedia alternatives (audio descriptions, captions)',
    '(c)': 'Color-coded information alternatives',
    '(d)': 'Readable without style sheets',
    '(e)': 'Redundant text links for server-side image maps',
    '(f)': 'Client-side image maps with text alternatives',
    '(g)': 'Row and column headers for data tables',
    '(h)': 'Markup for data table structure',
    '(i)': 'Frame titles',
    '(j)': 'Flicker-free pages (2-55 Hz)',
    '(k)': 'Text-only alternative page',
    '(l)': 'Script accessibility (screen readers)',
    '(m)': 'Applet/plug-in accessibility',
    '(n)': 'Accessible electronic forms',
    '(o)': 'Skip navigation mechanism',
    '(p)': 'Timed response user control',
})

# Criteria referenced here but absent from WCAG_CRITERIA (AAA or unlisted)
# are dropped by get_wcag_for_rule.
AXE_RULE_MAPPING: Mapping[str, RuleMapping] = _rules({
    # Images and non-text content
    'image-alt': (['1.1.1'], ['(a)']),
    'input-image-alt': (['1.1.1', '4.1.2'], ['(a)', '(n)']),
    'area-alt': (['1.1.1', '2.4.4'], ['(a)']),
    'object-alt': (['1.1.1'], ['(a)', '(m)']),
    'svg-img-alt': (['1.1.1'], ['(a)']),
    'role-img-alt': (['1.1.1'], ['(a)']),

    # Color and contrast
    'color-contrast': (['1.4.3'], ['(c)']),
    'color-contrast-enhanced': (['1.4.6'], ['(c)']),
    'link-in-text-block': (['1.4.1'], ['(c)']),

    # Forms
    'label': (['1.3.1', '3.3.2', '4.1.2'], ['(n)']),
    'label-title-only': (['3.3.2'], ['(n)']),
    'input-button-name': (['4.1.2'], ['(n)']),
    'select-name': (['4.1.2', '3.3.2'], ['(n)']),
    'autocomplete-valid': (['1.3.5'], ['(n)']),

    # Document structure
    'document-title': (['2.4.2'], []),
    'html-has-lang': (['3.1.1'], []),
    'html-lang-valid': (['3.1.1'], []),
    'html-xml-lang-mismatch': (['3.1.1'], []),
    'valid-lang': (['3.1.2'], []),

    # Headings and landmarks
    'heading-order': (['1.3.1', '2.4.6'], []),
    'empty-heading': (['1.3.1', '2.4.6'], []),
    'page-has-heading-one': (['1.3.1'], []),
    'landmark-one-main': (['1.3.1', '2.4.1'], ['(o)']),
    'landmark-unique': (['1.3.1'], []),
    'region': (['1.3.1'], []),
    'bypass': (['2.4.1'], ['(o)']),

    # Links
    'link-name': (['2.4.4', '4.1.2'], ['(a)']),
    'identical-links-same-purpose': (['2.4.4'], []),

    # Tables
    'td-headers-attr': (['1.3.1'], ['(g)', '(h)']),
    'th-has-data-cells': (['1.3.1'], ['(g)', '(h)']),
    'scope-attr-valid': (['1.3.1'], ['(g)']),
    'table-fake-caption': (['1.3.1'], ['(g)']),

    # Focus and keyboard
    'focus-order-semantics': (['2.4.3'], []),
    'focusable-no-name': (['4.1.2'], []),
    'tabindex': (['2.4.3'], []),
    'accesskeys': (['2.1.4'], []),

    # ARIA
    'aria-allowed-attr': (['4.1.2'], ['(l)']),
    'aria-allowed-role': (['4.1.2'], ['(l)']),
    'aria-hidden-body': (['4.1.2'], ['(l)']),
    'aria-hidden-focus': (['4.1.2', '1.3.1'], ['(l)']),
    'aria-input-field-name': (['4.1.2'], ['(l)', '(n)']),
    'aria-required-attr': (['4.1.2'], ['(l)']),
    'aria-required-children': (['1.3.1'], ['(l)']),
    'aria-required-parent': (['1.3.1'], ['(l)']),
    'aria-roles': (['4.1.2'], ['(l)']),
    'aria-toggle-field-name': (['4.1.2'], ['(l)']),
    'aria-valid-attr': (['4.1.2'], ['(l)']),
    'aria-valid-attr-value': (['4.1.2'], ['(l)']),

    # Buttons
    'button-name': (['4.1.2'], ['(a)', '(l)']),

    # Frames
    'frame-title': (['2.4.1', '4.1.2'], ['(i)']),
    'frame-title-unique': (['4.1.2'], ['(i)']),

    # Lists
    'definition-list': (['1.3.1'], []),
    'dlitem': (['1.3.1'], []),
    'list': (['1.3.1'], []),
    'listitem': (['1.3.1'], []),

    # Other
    'duplicate-id': (['4.1.1'], []),
    'duplicate-id-active': (['4.1.1'], []),
    'duplicate-id-aria': (['4.1.1'], []),
    'meta-refresh': (['2.2.1', '2.2.4', '3.2.5'], ['(p)']),
    'meta-viewport': (['1.4.4', '1.4.10'], []),
    'scrollable-region-focusable': (['2.1.1'], []),
    'server-side-image-map': (['2.1.1'], ['(e)', '(f)']),
    'nested-interactive': (['4.1.2'], ['(l)']),
    'no-autoplay-audio': (['1.4.2'], ['(b)']),
    'video-caption': (['1.2.2'], ['(b)']),
    'audio-caption': (['1.2.1'], ['(b)']),
    'blink': (['2.2.2'], ['(j)']),
    'marquee': (['2.2.2'], ['(j)']),
})


def get_rule_mapping(rule_id: str) -> Optional[RuleMapping]:
    """Get the raw standards mapping for an axe rule, if any."""
    return AXE_RULE_MAPPING.get(rule_id)


def get_wcag_for_rule(rule_id: str) -> List[WcagCriterion]:
    """Get WCAG criteria for an axe rule."""
    mapping = AXE_RULE_MAPPING.get(rule_id)
    if mapping is None:
        return []
    return [WCAG_CRITERIA[c] for c in mapping.wcag if c in WCAG_CRITERIA]


def get_section508_for_rule(rule_id: str) -> List[str]:
    """Get Section 508 provisions for an axe rule."""
    mapping = AXE_RULE_MAPPING.get(rule_id)
    if mapping is None:
        return []
    return list(mapping.section508)


def get_wcag_aa_criteria() -> List[WcagCriterion]:
    """Get all WCAG criteria that apply to Level A and AA."""
    return [c for c in WCAG_CRITERIA.values() if c.level in ('A', 'AA')]
