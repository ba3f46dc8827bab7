"""
ifacestat entry point. Runs the collector's plugin entry points locally.

Usage:
    ifacestat list                                   Metric catalog
    ifacestat collect /intel/procfs/iface/lo/bytes_recv
    ifacestat meta                                   Plugin metadata
    ifacestat watch --refresh 1                      Live per-interface counters
    ifacestat --proc-path ./net.dev list             Read a saved table instead
"""

from __future__ import annotations

import json
import logging

import click
from rich.console import Console

from ifacestat import __version__
from ifacestat.collector.iface_collector import IfaceCollector, MetricLookupError
from ifacestat.collector.net_dev_parser import DEFAULT_PROC_NET_DEV, NetDevParseError
from ifacestat.dashboard.terminal import (
    build_catalog_table,
    build_meta_table,
    build_metrics_table,
    run_jsonl,
    run_watch,
)
from ifacestat.metrics import Namespace


log = logging.getLogger("ifacestat")


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="ifacestat")
@click.option("--proc-path", default=DEFAULT_PROC_NET_DEV, envvar="IFACESTAT_PROC_PATH",
              show_default=True, help="Path to the /proc/net/dev table to read")
@click.option("--output", type=click.Choice(["tui", "jsonl"]), default="tui",
              help="Output mode: tui (Rich tables) or jsonl (one JSON line per record)")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx, proc_path: str, output: str, verbose: bool):
    """ifacestat - network interface counters collector."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["collector"] = IfaceCollector(proc_path=proc_path)
    ctx.obj["output"] = output
    log.debug("Using source %s", proc_path)


@cli.command("list")
@click.pass_context
def list_metrics(ctx):
    """Print the metric catalog (wildcard namespaces)."""
    collector = ctx.obj["collector"]
    try:
        mts = collector.get_metric_types({})
    except (OSError, NetDevParseError) as e:
        _fail(str(e))

    if ctx.obj["output"] == "jsonl":
        for mt in mts:
            click.echo(json.dumps(mt.summary()))
        return

    Console().print(build_catalog_table(mts))


@cli.command()
@click.argument("namespaces", nargs=-1, required=True)
@click.pass_context
def collect(ctx, namespaces):
    """Collect values for the given /intel/procfs/iface/<iface>/<counter> namespaces."""
    collector = ctx.obj["collector"]
    requested = [Namespace.parse(ns) for ns in namespaces]
    try:
        metrics = collector.collect_metrics(requested)
    except (OSError, NetDevParseError, MetricLookupError) as e:
        _fail(str(e))

    if ctx.obj["output"] == "jsonl":
        for m in metrics:
            click.echo(json.dumps(m.summary()))
        return

    Console().print(build_metrics_table(metrics))


@cli.command()
@click.pass_context
def meta(ctx):
    """Print plugin metadata."""
    info = ctx.obj["collector"].meta()
    if ctx.obj["output"] == "jsonl":
        click.echo(json.dumps({
            "name": info.name,
            "version": info.version,
            "type": info.plugin_type,
            "concurrency_count": info.concurrency_count,
        }))
        return

    Console().print(build_meta_table(info))


@cli.command()
@click.option("--refresh", default=2.0, help="Refresh interval in seconds")
@click.option("--count", default=0, help="Stop after N records (jsonl only, 0 = forever)")
@click.pass_context
def watch(ctx, refresh: float, count: int):
    """Re-read the table on an interval and show every interface's counters."""
    collector = ctx.obj["collector"]
    if ctx.obj["output"] == "jsonl":
        run_jsonl(collector, refresh_interval=refresh, count=count)
    else:
        run_watch(collector, refresh_interval=refresh)


if __name__ == "__main__":
    cli()
