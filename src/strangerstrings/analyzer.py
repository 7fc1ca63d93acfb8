"""StrangerStrings: extract candidate strings and decide which are readable text."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterable, Sequence

from strangerstrings._utils import (
    DEFAULT_MIN_LENGTH,
    _resolve_encodings,
    _validate_min_length,
)
from strangerstrings.enums import EncodingKind, ScriptType
from strangerstrings.errors import InvalidInputError, ModelNotLoadedError
from strangerstrings.models import TrigramModel, parse_model_file, parse_model_string
from strangerstrings.pipeline import (
    BinaryString,
    LanguageDetectionResult,
    StringAnalysisResult,
)
from strangerstrings.pipeline.dispatch import ScoringDispatcher
from strangerstrings.pipeline.extract import (
    MultiEncodingExtractor,
    extract_ascii_strings,
)
from strangerstrings.pipeline.script import detect_script
from strangerstrings.pipeline.trigram import TrigramScorer, score_normalized

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class AnalysisOptions:
    """Where to load a trigram model from.

    Exactly one of *model_path* and *model_content* is used; the path wins
    when both are given.  *minimum_length* becomes the default minimum run
    length for binary analysis.
    """

    model_path: str | os.PathLike[str] | None = None
    model_content: str | None = None
    minimum_length: int | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class BinaryAnalysisOptions:
    """Per-call settings for :meth:`StrangerStrings.analyze_binary`.

    ``None`` fields fall back to the analyzer's defaults: the minimum length
    from :class:`AnalysisOptions` (else 4) and ASCII-only extraction.
    """

    min_length: int | None = None
    encodings: Sequence[str | EncodingKind] | None = None
    use_script_scoring: bool = False


class StrangerStrings:
    """Scores candidate strings for how likely they are human-readable text.

    After :meth:`load_model` (or :meth:`enable_script_scoring`) the analyzer
    holds only read-only state, so one instance can be shared by threads.
    """

    def __init__(self) -> None:
        self._model: TrigramModel | None = None
        self._trigram: TrigramScorer | None = None
        self._dispatcher: ScoringDispatcher | None = None
        self._min_length = DEFAULT_MIN_LENGTH

    @property
    def model(self) -> TrigramModel | None:
        return self._model

    def load_model(self, options: AnalysisOptions) -> None:
        """Parse and install a trigram model.

        :raises InvalidInputError: If *options* names neither a path nor
            inline content.
        :raises ModelParsingError: If the model description is malformed.
        :raises OSError: If the model file cannot be read.
        """
        if options.model_path is not None:
            model = parse_model_file(options.model_path)
        elif options.model_content is not None:
            model = parse_model_string(options.model_content)
        else:
            msg = "Either model_path or model_content must be provided"
            raise InvalidInputError(msg)
        if options.minimum_length is not None:
            _validate_min_length(options.minimum_length)
            self._min_length = options.minimum_length
        self.set_model(model)

    def set_model(self, model: TrigramModel) -> None:
        """Install an already-parsed model, shared without copying."""
        generic_fallback = (
            self._dispatcher is not None and self._dispatcher.generic_fallback
        )
        self._model = model
        self._trigram = TrigramScorer(model)
        self._dispatcher = ScoringDispatcher(model, generic_fallback=generic_fallback)
        logger.debug("Using %s model", model.model_type)

    def enable_script_scoring(self, generic_fallback: bool = False) -> None:
        """Allow script-aware scoring, even without a trigram model.

        :param generic_fallback: Score Unknown-script text with the generic
            heuristic when no model is loaded, instead of raising
            :class:`~strangerstrings.errors.ModelNotLoadedError`.
        """
        self._dispatcher = ScoringDispatcher(
            self._model, generic_fallback=generic_fallback
        )

    def has_script_scoring(self) -> bool:
        return self._dispatcher is not None

    def get_model_info(self) -> tuple[str, bool]:
        """Return ``(model_type, is_lowercase)`` of the loaded model.

        :raises ModelNotLoadedError: If no model is loaded.
        """
        if self._model is None:
            raise ModelNotLoadedError
        return self._model.model_type, self._model.is_lowercase

    def analyze_string(
        self,
        text: str,
        offset: int | None = None,
        *,
        use_script_scoring: bool = False,
        force_script: str | ScriptType | None = None,
    ) -> StringAnalysisResult:
        """Score one candidate string.

        With script scoring (implied by *force_script*) the string is routed
        by script and ``normalized_string`` is the input unchanged; otherwise
        it is scored with the trigram model after normalization.

        :param text: The candidate string.
        :param offset: Byte offset to record in the result.
        :param use_script_scoring: Route the string by its detected script.
        :param force_script: Score as this script instead of detecting one.
        :raises ModelNotLoadedError: If the chosen path needs a model and
            none is loaded.
        :raises InvalidInputError: If *force_script* is not a known script.
        """
        return self._analyze(text, offset, None, use_script_scoring, force_script)

    def _analyze(
        self,
        text: str,
        offset: int | None,
        encoding: EncodingKind | None,
        use_script_scoring: bool,
        force_script: str | ScriptType | None,
    ) -> StringAnalysisResult:
        script = None if force_script is None else ScriptType.from_name(force_script)
        if (use_script_scoring or script is not None) and self._dispatcher is not None:
            if script is None:
                scored = self._dispatcher.score(text)
            else:
                scored = self._dispatcher.score_with_script(text, script)
            return StringAnalysisResult(
                original_string=text,
                normalized_string=text,
                score=scored.score,
                threshold=scored.threshold,
                offset=offset,
                encoding=encoding,
                detected_script=scored.script_type,
                scorer_name=scored.scorer_name,
            )

        if self._trigram is None:
            raise ModelNotLoadedError
        normalized = self._trigram.normalize(text)
        score, threshold = score_normalized(normalized, self._trigram.model)
        return StringAnalysisResult(
            original_string=text,
            normalized_string=normalized.normalized,
            score=score,
            threshold=threshold,
            offset=offset,
            encoding=encoding,
        )

    def analyze_strings(
        self, texts: Iterable[str], *, use_script_scoring: bool = False
    ) -> list[StringAnalysisResult]:
        """Score every string; the first error aborts the whole batch."""
        return [
            self.analyze_string(text, use_script_scoring=use_script_scoring)
            for text in texts
        ]

    def extract_valid_strings(
        self, texts: Iterable[str], *, use_script_scoring: bool = False
    ) -> list[StringAnalysisResult]:
        """Score every string and keep only the accepted ones."""
        results = self.analyze_strings(texts, use_script_scoring=use_script_scoring)
        return [result for result in results if result.is_valid]

    def extract_strings_from_binary(
        self, data: bytes, min_length: int = DEFAULT_MIN_LENGTH
    ) -> list[BinaryString]:
        """Return the plain ASCII runs of *data*, without garbage filtering."""
        return extract_ascii_strings(data, min_length)

    def analyze_binary(
        self, data: bytes, options: BinaryAnalysisOptions | None = None
    ) -> list[StringAnalysisResult]:
        """Extract candidate strings from *data* and score each of them.

        :returns: One result per candidate, in ``(offset, content)`` order,
            each carrying the offset and encoding it was found with.
        :raises ModelNotLoadedError: As for :meth:`analyze_string`; the first
            failure aborts the whole analysis.
        """
        if options is None:
            options = BinaryAnalysisOptions()
        min_length = self._min_length if options.min_length is None else options.min_length
        extractor = MultiEncodingExtractor(
            _resolve_encodings(options.encodings), min_length
        )
        candidates = extractor.extract_strings(data)
        logger.debug("Scoring %d candidate strings", len(candidates))
        return [
            self._analyze(
                candidate.content,
                candidate.offset,
                candidate.encoding,
                options.use_script_scoring,
                None,
            )
            for candidate in candidates
        ]

    def detect_script(self, text: str) -> LanguageDetectionResult:
        """Detect the dominant script of *text*; needs no model."""
        if self._dispatcher is not None:
            return self._dispatcher.detect(text)
        return detect_script(text)
