#!/usr/bin/env python3

import json
import logging
import signal
import sys
import threading
import time

import click
from netrate import glyphs
from netrate.data.network_rates import NetworkWidget
from netrate.util import log, network, procnet, system, widget
from netrate.util.sampler import RateSampler

condition = threading.Condition()
context_settings = dict(help_option_names=["-h", "--help"])
needs_fetch = False

logger = logging.getLogger("netrate")


def refresh_handler(_signum: int, _frame: object | None):
    global needs_fetch
    logger.info("received SIGHUP, re-sampling")
    with condition:
        needs_fetch = True
        condition.notify()


def fetch(rate_sampler: RateSampler) -> NetworkWidget:
    rates = rate_sampler.sample_rates()
    return widget.build_network_widget(rates=rates, ip=network.get_primary_ip())


def render(network_widget: NetworkWidget, output_format: str) -> str:
    if output_format == "widget":
        return json.dumps(widget.widget_to_dict(network_widget))

    text, output_class, tooltip = widget.render_output(network_widget)
    return json.dumps({"text": text, "class": output_class, "tooltip": tooltip})


def emit(rate_sampler: RateSampler, output_format: str):
    try:
        network_widget = fetch(rate_sampler)
    except Exception as e:
        logger.exception("failed to build the network widget")
        system.error_exit(icon=glyphs.md_alert, message=str(e))
        return

    print(render(network_widget, output_format))


def worker(rate_sampler: RateSampler, output_format: str):
    global needs_fetch

    while True:
        with condition:
            while not needs_fetch:
                _ = condition.wait()
            needs_fetch = False

        emit(rate_sampler, output_format)


@click.command(
    name="network-rates",
    help="Report network throughput from /proc/net/dev",
    context_settings=context_settings,
)
@click.option(
    "-s",
    "--source",
    default=procnet.PROC_NET_DEV,
    envvar="NETRATE_SOURCE",
    show_default=True,
    help="The interface counter file to sample",
)
@click.option(
    "--interval",
    type=click.IntRange(min=0),
    default=5,
    help="The update interval (in seconds), at least 1 unless --test is set",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["waybar", "widget"]),
    default="waybar",
    show_default=True,
    help="The output shape",
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print the output and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(source: str, interval: int, output_format: str, test: bool, debug: bool):
    global needs_fetch

    if interval < 1 and not test:
        raise click.BadParameter(
            "must be at least 1 unless --test is set", param_hint="'--interval'"
        )

    logfile = system.get_cache_directory() / "netrate-network-rates.log"
    log.configure(debug=debug, name="netrate", logfile=logfile)
    sampler = RateSampler(source=source)

    if test:
        # The first sample only seeds the sampler
        sampler.sample_rates()
        time.sleep(interval)
        emit(sampler, output_format)
        return

    sys.stdout.reconfigure(line_buffering=True)  # type: ignore
    logger.info(f"entering with source={source} interval={interval}")
    _ = signal.signal(signal.SIGHUP, refresh_handler)

    threading.Thread(target=worker, args=(sampler, output_format), daemon=True).start()

    with condition:
        needs_fetch = True
        condition.notify()

    while True:
        time.sleep(interval)
        with condition:
            needs_fetch = True
            condition.notify()


if __name__ == "__main__":
    main()
