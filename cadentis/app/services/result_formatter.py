"""Result formatting helpers for verse analysis."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from cadentis.core import LineAnalysis, RhymeSchemeResult, RhymeType


class VerseResultFormatter:
    """Render analyses as plain-text reports or JSON-ready dictionaries."""

    empty_message = "No verse lines to analyse."

    def format_line(self, analysis: LineAnalysis, index: Optional[int] = None) -> str:
        heading = analysis.text or "(empty line)"
        if index is not None:
            heading = f"{index}. {heading}"

        lines: List[str] = [heading]
        syllables = "·".join(syllable.text for syllable in analysis.syllables)
        if syllables:
            lines.append(f"   Syllables: {syllables} ({analysis.syllable_count})")
        lines.append(
            f"   Pattern: {analysis.pattern or '-'} | Morae: {analysis.mora_count}"
        )

        form_parts = [analysis.verse_type]
        if analysis.match.form is not None and analysis.match.is_approximate:
            form_parts.append(f"similarity {analysis.match.score:.2f}")
        form_parts.append(analysis.direction.value)
        lines.append(f"   Form: {' | '.join(form_parts)}")

        for substitution in analysis.match.substitutions:
            lines.append(f"   • {substitution.describe()}")
        if analysis.rhyme_label:
            lines.append(f"   Rhyme: {analysis.rhyme_label}")
        return "\n".join(lines)

    def format_analysis(
        self,
        analyses: Sequence[LineAnalysis],
        scheme: Optional[RhymeSchemeResult] = None,
    ) -> str:
        """Render every line, followed by the rhyme scheme when one is given."""

        if not analyses:
            return self.empty_message

        blocks = [self.format_line(analysis, index) for index, analysis in enumerate(analyses, 1)]
        if scheme is not None:
            blocks.append(self.format_scheme(scheme))
        return "\n\n".join(blocks)

    def format_scheme(self, scheme: RhymeSchemeResult) -> str:
        pattern = "".join(scheme.pattern) or "-"
        lines = [f"Rhyme scheme: {pattern} ({scheme.scheme_name})"]
        if len(scheme.stanzas) > 1:
            for number, stanza in enumerate(scheme.stanzas, 1):
                lines.append(
                    f"   Stanza {number}: {''.join(stanza.labels)} ({stanza.scheme_name})"
                )
        return "\n".join(lines)

    def format_rhyme_type(self, first: str, second: str, rhyme: RhymeType) -> str:
        return f"'{first}' / '{second}': {rhyme.label} ({rhyme.hungarian})"

    def as_dict(
        self,
        analyses: Sequence[LineAnalysis],
        scheme: Optional[RhymeSchemeResult] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"lines": [analysis.as_dict() for analysis in analyses]}
        if scheme is not None:
            payload["rhyme_scheme"] = scheme.as_dict()
        return payload

    def rhyme_type_as_dict(self, first: str, second: str, rhyme: RhymeType) -> Dict[str, Any]:
        return {
            "first": first,
            "second": second,
            "rhyme_type": rhyme.name.lower(),
            "label": rhyme.label,
            "hungarian": rhyme.hungarian,
        }


__all__ = ["VerseResultFormatter"]
