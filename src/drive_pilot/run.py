"""Command-line entry points for drive_pilot.

Usage:
    drive-pilot frames_dir=data/frames model_path=models/steering.onnx
    drive-pilot ... time_scale=2.0 output_dir=outputs/decisions
    drive-pilot-train client.api_url=http://127.0.0.1:8000/api/train
"""

import sys
from collections import Counter
from pathlib import Path
from typing import Any

import hydra
from loguru import logger
from omegaconf import DictConfig, OmegaConf
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from drive_pilot.config import (
    ChartConfig,
    DrivingConfig,
    PreprocessConfig,
    SchedulerConfig,
    TrainingClientConfig,
)
from drive_pilot.control import RecordingSink
from drive_pilot.data.frames import ImageDirectorySource
from drive_pilot.errors import CaptureFailure
from drive_pilot.inference.onnx_classifier import ONNXSteeringClassifier
from drive_pilot.io.decision_log import DecisionLogWriter
from drive_pilot.pipeline import DrivingPipeline
from drive_pilot.scheduler import TimeScale
from drive_pilot.schemas.record import DecisionRecord
from drive_pilot.training.client import TrainingClient, TrainingSession
from drive_pilot.types import DrivingCommand
from drive_pilot.visualization.plotting import render_chart, save_image


def _section(cfg: DictConfig, key: str) -> dict[str, Any]:
    node = cfg.get(key)
    if node is None:
        return {}
    return OmegaConf.to_container(node, resolve=True)  # type: ignore[return-value]


def _setup_logging(cfg: DictConfig) -> None:
    logger.remove()
    logger.add(sys.stderr, level=cfg.get("log_level", "INFO"))


def _print_summary(counts: Counter[DrivingCommand], pipeline: DrivingPipeline) -> None:
    console = Console()
    table = Table(title="Replay Decisions")
    table.add_column("Command", style="cyan")
    table.add_column("Symbol", justify="center")
    table.add_column("Frames", justify="right", style="green")
    total = sum(counts.values())
    for command in DrivingCommand:
        table.add_row(command.value, command.symbol, str(counts.get(command, 0)))
    table.add_row("Total", "", str(total), style="bold")
    console.print(table)

    message = f"Classified every {pipeline.scheduler.effective_frequency} frame(s)"
    rate = pipeline.scheduler.measured_rate
    if rate is not None:
        message += f", measured {rate:.2f}/sec"
    console.print(message)


def replay(cfg: DictConfig) -> int:
    """Drive through a directory of frames; returns a process exit code."""
    try:
        source = ImageDirectorySource(cfg.frames_dir, loop=cfg.get("loop", False))
    except CaptureFailure as e:
        logger.error(str(e))
        return 1

    driving_config = DrivingConfig(**_section(cfg, "driving"))
    scheduler_config = SchedulerConfig(**_section(cfg, "scheduler"))
    classifier = ONNXSteeringClassifier(cfg.model_path)
    pipeline = DrivingPipeline(
        frame_source=source,
        classifier=classifier,
        sink=RecordingSink(),
        driving_config=driving_config,
        preprocess_config=PreprocessConfig(**_section(cfg, "preprocess")),
        scheduler_config=scheduler_config,
    )
    if not pipeline.set_autonomous(True):
        logger.error("No model loaded, nothing to replay")
        return 1

    time_scale = TimeScale(cfg.get("time_scale", 1.0))
    frames_per_step = pipeline.scheduler.refresh_frequency(time_scale.value)
    dt = 1.0 / float(cfg.get("fps", 60))
    writer = None
    if cfg.get("output_dir"):
        writer = DecisionLogWriter(Path(cfg.output_dir))
    logger.info(
        f"Replaying at {time_scale.label}, "
        f"classifying every {frames_per_step} frame(s)"
    )

    counts: Counter[DrivingCommand] = Counter()
    for _ in tqdm(range(len(source) * frames_per_step), desc="replay"):
        result = pipeline.tick(dt, time_scale.value)
        if result.decision is None or result.output is None:
            continue
        counts[result.decision.command] += 1
        if writer is not None and source.current is not None:
            writer.write(
                DecisionRecord(
                    frame=source.current.name,
                    command=result.decision.command,
                    confidence=result.decision.confidence,
                    probabilities=list(result.decision.probabilities),
                    control=result.output,
                )
            )

    pipeline.set_autonomous(False)
    _print_summary(counts, pipeline)
    return 0


def train(cfg: DictConfig) -> int:
    """Trigger training and save charts; returns a process exit code."""
    session = TrainingSession(
        TrainingClient(TrainingClientConfig(**_section(cfg, "client"))),
        ChartConfig(**_section(cfg, "chart")),
    )
    status = session.start()
    Console().print(f"Status: {status}")
    if session.response is None:
        return 1

    output_dir = Path(cfg.get("output_dir", "outputs/training"))
    for chart in (session.loss_chart, session.accuracy_chart):
        if chart is not None:
            render_chart(chart, output_dir / f"{chart.name.lower()}_history.png")
    if session.confusion_matrix is not None:
        save_image(session.confusion_matrix, output_dir / "confusion_matrix.png")
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="replay")
def main(cfg: DictConfig) -> None:
    """Replay frames with the given Hydra config."""
    _setup_logging(cfg)
    logger.debug(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    sys.exit(replay(cfg))


@hydra.main(version_base=None, config_path="conf", config_name="train")
def train_main(cfg: DictConfig) -> None:
    """Trigger remote training with the given Hydra config."""
    _setup_logging(cfg)
    logger.debug(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    sys.exit(train(cfg))


if __name__ == "__main__":
    main()
