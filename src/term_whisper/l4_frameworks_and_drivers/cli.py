"""CLI entry points for term-whisper — batch spinner and interactive TUI."""

from __future__ import annotations

import sys

import click
import yaml
from pydantic import ValidationError

from term_whisper import __version__
from term_whisper.l1_entities.config import AppConfig


def _load_config(overrides: dict) -> AppConfig:
    """User config file (if any) on top of defaults, then the entry point's fixed overrides."""
    from term_whisper.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )
    from term_whisper.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: ML stack not loaded on --help
        DependencyContainer,
    )

    try:
        raw = DependencyContainer.config_loader().load_raw()
        return build_app_config(raw, overrides)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        click.echo(f'Error: invalid configuration: {e}', err=True)
        sys.exit(1)


@click.command()
@click.version_option(version=__version__)
def batch_cli():
    """Transcribe the bundled sample recording with a live spinner status."""
    from term_whisper.l3_interface_adapters.gateways.paths import (  # noqa: PLC0415 -- deferred: not needed for --help
        LOG_DIR,
    )
    from term_whisper.l4_frameworks_and_drivers.batch_runner import (  # noqa: PLC0415 -- deferred: batch mode only
        run_batch,
    )
    from term_whisper.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        BATCH_OVERRIDES,
    )
    from term_whisper.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: ML stack not loaded on --help
        DependencyContainer,
    )
    from term_whisper.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_file_logging,
    )

    config = _load_config(BATCH_OVERRIDES)
    setup_file_logging(LOG_DIR)
    run_batch(DependencyContainer(config), config.default_audio)


@click.command(
    epilog="""\b
Examples:
  term-whisper-tui jfk.wav
  term-whisper-tui https://example.com/audio.wav""",
)
@click.argument('source', required=False)
@click.version_option(version=__version__)
def tui_cli(source):
    """Transcribe SOURCE (a local WAV file or an http(s) URL) in a terminal UI.

    Without SOURCE a short sample recording is downloaded and transcribed.
    """
    from term_whisper.l4_frameworks_and_drivers.app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help
        TranscriberApp,
    )
    from term_whisper.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        TUI_OVERRIDES,
    )
    from term_whisper.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: ML stack not loaded on --help
        DependencyContainer,
    )

    config = _load_config(TUI_OVERRIDES)
    app = TranscriberApp(source=source or config.default_audio, container=DependencyContainer(config))
    app.run()
