"""Core data models shared across vue_analyzer components."""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Sequence, Union

SCRIPT_CLASSIC = "script"
SCRIPT_SETUP = "script setup"

ScriptType = Optional[Literal["script", "script setup"]]

_RESULT_SEQUENCES = ("components", "imports", "defined_props", "data", "computed", "methods")

# ``True`` marks a prop that is present but has no static string value.
PropValue = Union[str, Literal[True]]


@dataclass
class ComponentUsage:
    """A template element recognised as a reference to another component."""

    name: str
    props: Dict[str, PropValue] = field(default_factory=dict)


@dataclass
class ScriptAnalysis:
    """Bindings collected from one script block before merging into a result."""

    imports: List[str] = field(default_factory=list)
    defined_props: List[str] = field(default_factory=list)
    data: List[str] = field(default_factory=list)
    computed: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured summary of a single ``.vue`` document.

    Sequence fields accept any iterable and are stored as tuples, so a result
    cannot change after the orchestrator builds it.
    """

    file_path: str
    script_type: ScriptType
    style_count: int
    components: Sequence[ComponentUsage] = ()
    imports: Sequence[str] = ()
    defined_props: Sequence[str] = ()
    data: Sequence[str] = ()
    computed: Sequence[str] = ()
    methods: Sequence[str] = ()

    def __post_init__(self) -> None:
        for name in _RESULT_SEQUENCES:
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class FileOutcome:
    """Result-or-error for one analysed file."""

    file_path: str
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class BatchReport:
    """Outcomes of a batch run, in discovery order."""

    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def results(self) -> List[AnalysisResult]:
        return [outcome.result for outcome in self.outcomes if outcome.result is not None]

    @property
    def failures(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.result is None]
