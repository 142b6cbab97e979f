"""Optional NER rule — Presidio-based detection for free-text cells.

Catches names, locations and other entities that the fixed regex chain
can't reliably detect.  Uses spaCy under the hood, so it is only loaded
when RedactorConfig.use_presidio is set.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

# Lazy singleton: spaCy is not loaded until first use
_engine: AnalyzerEngine | None = None
_engine_lang: str = ""


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine."""
    global _engine, _engine_lang
    if _engine is None or _engine_lang != language:
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
        })
        nlp_engine = provider.create_engine()
        _engine = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
        _engine_lang = language
    return _engine


# Entities worth masking in a table cell; structured ones are the regex chain's job
DEFAULT_ENTITIES = [
    "PERSON",
    "LOCATION",
    "NRP",           # nationality, religious, political group
    "MEDICAL_LICENSE",
]


def find_entities(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
) -> list[str]:
    """Entity types Presidio finds in text, in order of appearance."""
    engine = _get_engine(language)
    results = engine.analyze(
        text=text,
        language=language,
        entities=entities or DEFAULT_ENTITIES,
        score_threshold=score_threshold,
    )
    return [r.entity_type for r in sorted(results, key=lambda r: r.start)]


def has_entities(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
) -> bool:
    return bool(find_entities(
        text,
        language=language,
        entities=entities,
        score_threshold=score_threshold,
    ))
