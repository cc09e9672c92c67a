"""Summary DAG running configured statistics over a batch of plates."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import yaml

from plate.plate import Plate
from plate.well import Well
from stats.registry import get_statistic


@dataclass
class AuditLogger:
    entries: List[str] = field(default_factory=list)

    def log(self, message: str) -> None:
        self.entries.append(message)


@dataclass
class StatisticStep:
    """One statistic of a summary template."""

    statistic: str
    params: Dict[str, Any] = field(default_factory=dict)
    begin: Optional[int] = None
    length: Optional[int] = None
    aggregated: bool = False
    label: Optional[str] = None

    @property
    def task_name(self) -> str:
        if self.label:
            return self.label
        name = self.statistic
        for key, value in sorted(self.params.items()):
            name += f"_{key}{value}"
        if self.begin is not None:
            name += f"_{self.begin}-{self.begin + (self.length or 0)}"
        if self.aggregated:
            name += "_aggregated"
        return name


@dataclass
class SummaryTemplate:
    name: str
    steps: List[StatisticStep] = field(default_factory=list)


class SummaryTemplateLibrary:
    """Loads summary templates from YAML/JSON definitions."""

    def __init__(self, template_dir: Optional[Path] = None):
        base_dir = template_dir or Path(__file__).parent / "templates"
        self.template_dir = Path(base_dir)

    def get_template(self, template_name: str) -> SummaryTemplate:
        template_path = self._resolve_template_path(template_name)
        with template_path.open() as f:
            raw = yaml.safe_load(f) or {}
        steps: List[StatisticStep] = []
        seen = set()
        for step in raw.get("statistics", []):
            # unknown names fail here rather than halfway through a run
            get_statistic(step["statistic"])
            parsed = StatisticStep(
                statistic=step["statistic"],
                params=dict(step.get("params") or {}),
                begin=step.get("begin"),
                length=step.get("length"),
                aggregated=bool(step.get("aggregated", False)),
                label=step.get("label"),
            )
            if parsed.task_name in seen:
                raise ValueError(f"Duplicate task name in template {template_name}: {parsed.task_name}")
            seen.add(parsed.task_name)
            steps.append(parsed)
        return SummaryTemplate(name=raw.get("name", template_name), steps=steps)

    def _resolve_template_path(self, template_name: str) -> Path:
        for suffix in (".yaml", ".yml", ".json"):
            path = self.template_dir / f"{template_name}{suffix}"
            if path.exists():
                return path
        raise FileNotFoundError(f"Template {template_name} not found in {self.template_dir}")


@dataclass
class SummaryTask:
    name: str
    func: Callable[[], object]


class SummaryDAG:
    def __init__(self, logger: AuditLogger):
        self.logger = logger
        self.tasks: List[SummaryTask] = []

    def add_task(self, name: str, func: Callable[[], object]) -> None:
        self.tasks.append(SummaryTask(name=name, func=func))

    def run(self) -> List[Tuple[str, object]]:
        results: List[Tuple[str, object]] = []
        for task in self.tasks:
            try:
                output = task.func()
            except Exception:
                self.logger.log(f"failed:{task.name}")
                raise
            results.append((task.name, output))
            self.logger.log(f"executed:{task.name}")
        return results


@dataclass
class PlateSummary:
    template: str
    results: Dict[str, Dict[Plate, Any]]

    def to_json(self) -> Dict[str, object]:
        return {
            "template": self.template,
            "results": {name: _render(result) for name, result in self.results.items()},
        }


def _render(value: Any) -> Any:
    if isinstance(value, dict):
        return {_key(key): _render(item) for key, item in value.items()}
    return value


def _key(key: Any) -> str:
    if isinstance(key, Well):
        return key.id
    if isinstance(key, Plate):
        return key.label
    return str(key)


def _step_runner(step: StatisticStep, plates: Sequence[Plate]) -> Callable[[], Dict[Plate, Any]]:
    statistic = get_statistic(step.statistic)

    def _run() -> Dict[Plate, Any]:
        if step.aggregated:
            return statistic.plates_aggregated(plates, step.begin, step.length, **step.params)
        per_plate: Dict[Plate, Any] = {}
        for plate in plates:
            per_plate[plate] = statistic.plate(plate, step.begin, step.length, **step.params)
        return per_plate

    return _run


def build_plate_summary(plates: Sequence[Plate], template: SummaryTemplate) -> Tuple[SummaryDAG, AuditLogger]:
    logger = AuditLogger()
    dag = SummaryDAG(logger)
    plates = list(plates)
    for step in template.steps:
        dag.add_task(step.task_name, _step_runner(step, plates))
    return dag, logger


def summarize_plates(
    plates: Sequence[Plate], template_name: str, library: Optional[SummaryTemplateLibrary] = None
) -> Tuple[PlateSummary, AuditLogger]:
    template = (library or SummaryTemplateLibrary()).get_template(template_name)
    dag, logger = build_plate_summary(plates, template)
    results = {name: output for name, output in dag.run()}
    return PlateSummary(template=template.name, results=results), logger
