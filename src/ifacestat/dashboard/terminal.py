"""Terminal output using Rich. Catalog and collect tables, plus a live per-interface view."""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import List

log = logging.getLogger(__name__)

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ifacestat import __version__
from ifacestat.collector.iface_collector import IfaceCollector
from ifacestat.collector.net_dev_parser import NetDevStats
from ifacestat.metrics import Metric, PluginMeta

# Give up after this many failed reads in a row
MAX_CONSECUTIVE_ERRORS = 5

# Columns shown in the live view; the rest are mostly zero on real hosts
WATCH_COUNTERS = (
    "bytes_recv", "packets_recv", "errs_recv", "drop_recv",
    "bytes_sent", "packets_sent", "errs_sent", "drop_sent",
)


def _style_for_errors(value: int) -> str:
    return "red" if value > 0 else "green"


def build_catalog_table(mts: List[Metric]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Namespace", no_wrap=True)
    table.add_column("Unit", style="dim")
    table.add_column("Description")
    for mt in mts:
        table.add_row(str(mt.namespace), mt.unit, mt.description)
    return table


def build_metrics_table(metrics: List[Metric]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Namespace", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_column("Unit", style="dim")
    table.add_column("Timestamp", style="dim")
    for m in metrics:
        table.add_row(
            str(m.namespace),
            f"{m.data:,}",
            m.unit,
            m.timestamp.strftime("%Y-%m-%d %H:%M:%S") if m.timestamp else "",
        )
    return table


def build_meta_table(meta: PluginMeta) -> Table:
    table = Table(show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Name", meta.name)
    table.add_row("Version", str(meta.version))
    table.add_row("Type", meta.plugin_type)
    table.add_row("Concurrency", str(meta.concurrency_count))
    return table


def build_stats_table(stats: NetDevStats) -> Table:
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Interface", style="bold")
    for counter in WATCH_COUNTERS:
        table.add_column(counter, justify="right")

    for iface in sorted(stats):
        counters = stats[iface]
        cells = []
        for counter in WATCH_COUNTERS:
            value = counters[counter]
            if counter.startswith(("errs_", "drop_")):
                style = _style_for_errors(value)
                cells.append(f"[{style}]{value:,}[/{style}]")
            else:
                cells.append(f"{value:,}")
        table.add_row(iface, *cells)
    return table


def _build_display(stats: NetDevStats, source_name: str) -> Panel:
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    title = f"ifacestat v{__version__}  |  {source_name}  |  {ts}"
    return Panel(build_stats_table(stats), title=title, border_style="blue")


def run_watch(collector: IfaceCollector, refresh_interval: float = 2.0):

    console = Console()
    source_name = collector.name()

    log.info("Starting watch: source=%s, refresh=%.1fs", source_name, refresh_interval)

    consecutive_errors = 0

    with Live(console=console, refresh_per_second=1) as live:
        try:
            while True:
                try:
                    stats = collector.get_stats()
                    consecutive_errors = 0
                except (OSError, ValueError) as e:
                    consecutive_errors += 1
                    log.warning("Read failed (attempt %d/%d): %s",
                                consecutive_errors, MAX_CONSECUTIVE_ERRORS, e)
                    if consecutive_errors >= MAX_CONSECUTIVE_ERRORS:
                        log.error("Giving up after %d failed reads", MAX_CONSECUTIVE_ERRORS)
                        console.print(f"\n[bold red]Giving up after {MAX_CONSECUTIVE_ERRORS} failed reads: {e}[/bold red]")
                        break
                    error_text = Text(
                        f"  Read error (retry {consecutive_errors}/{MAX_CONSECUTIVE_ERRORS}): {e}",
                        style="bold red",
                    )
                    live.update(Panel(error_text, border_style="red"))
                    time.sleep(refresh_interval)
                    continue

                live.update(_build_display(stats, source_name))
                time.sleep(refresh_interval)
        except KeyboardInterrupt:
            pass

    console.print("\n[dim]Watch stopped.[/dim]")


def stats_record(stats: NetDevStats, source_name: str) -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source_name,
        "interfaces": stats,
    }


def run_jsonl(collector: IfaceCollector, refresh_interval: float = 2.0, count: int = 0):
    """Non-interactive output mode: prints one JSON object per read per line.

    count=0 means run until interrupted.
    """
    source_name = collector.name()
    log.info("Starting JSONL output: source=%s, refresh=%.1fs", source_name, refresh_interval)

    consecutive_errors = 0
    emitted = 0

    try:
        while True:
            try:
                stats = collector.get_stats()
                consecutive_errors = 0
            except (OSError, ValueError) as e:
                consecutive_errors += 1
                log.warning("Read failed (attempt %d/%d): %s",
                            consecutive_errors, MAX_CONSECUTIVE_ERRORS, e)
                if consecutive_errors >= MAX_CONSECUTIVE_ERRORS:
                    log.error("Giving up after %d failed reads", MAX_CONSECUTIVE_ERRORS)
                    break
                time.sleep(refresh_interval)
                continue

            sys.stdout.write(json.dumps(stats_record(stats, source_name)) + "\n")
            sys.stdout.flush()
            emitted += 1
            if count and emitted >= count:
                break
            time.sleep(refresh_interval)
    except KeyboardInterrupt:
        pass
