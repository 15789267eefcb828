"""Click CLI entry point for rfsm-light."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from rfsm_light import __version__
from rfsm_light.codec import read_file, save_file, write_text_atomic
from rfsm_light.config import (
    detect_compiler,
    is_initialized,
    load_config,
    load_or_default,
    make_checker,
    save_config,
)
from rfsm_light.errors import RfsmLightError
from rfsm_light.model import Model
from rfsm_light.models import ToolConfig


@click.group()
@click.version_option(version=__version__, prog_name="rfsm-light")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """RFSM Light: check and export hierarchical FSM models."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_or_default(Path.cwd())


def _load_checked(ctx: click.Context, file_path: str, with_stimuli: bool) -> Model:
    """Read and validate a model, exiting with status 1 on any error."""
    config: ToolConfig = ctx.obj["config"]
    try:
        model = read_file(file_path)
        model.check(with_stimuli, make_checker(config))
    except RfsmLightError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
    return model


@cli.command()
@click.option("--compiler", default=None, help="Path to the rfsmc compiler")
def init(compiler: str | None) -> None:
    """Initialize a project configuration in the current directory."""
    project_root = Path.cwd()
    if is_initialized(project_root):
        config = load_config(project_root)
        click.echo("Warning: Project is already initialized. Updating configuration.")
    else:
        config = ToolConfig()
    if compiler is not None:
        config.compiler = compiler
    elif not config.compiler:
        config.compiler = detect_compiler()
    path = save_config(config, project_root)
    click.echo(f"Config:   {path}")
    click.echo(f"Compiler: {config.compiler or '(none, fragments not checked)'}")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--stimuli", is_flag=True, default=False, help="Require stimuli for all inputs")
@click.pass_context
def check(ctx: click.Context, file_path: str, stimuli: bool) -> None:
    """Validate a model file."""
    config: ToolConfig = ctx.obj["config"]
    model = _load_checked(ctx, file_path, stimuli or config.check_stimuli)
    click.echo(f"Model {model.name}: OK ({len(model.automatons)} automaton(s))")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", "output", type=click.Path(dir_okay=False), default=None)
@click.option("--split", is_flag=True, default=False, help="One file per automaton")
@click.option("--no-captions", is_flag=True, default=False, help="Omit IO / var captions")
@click.pass_context
def dot(ctx: click.Context, file_path: str, output: str | None, split: bool, no_captions: bool) -> None:
    """Export a model as Graphviz DOT."""
    from rfsm_light.exporters.dot import export_dot, export_dots

    config: ToolConfig = ctx.obj["config"]
    captions = config.dot_captions and not no_captions
    model = _load_checked(ctx, file_path, False)

    if split:
        out_dir = Path(output).parent if output else Path.cwd()
        for name, text in export_dots(model, captions).items():
            path = write_text_atomic(out_dir / f"{name}.dot", text)
            click.echo(f"Wrote {path}")
        return

    text = export_dot(model, captions)
    if output:
        write_text_atomic(output, text)
        click.echo(f"Wrote {output}")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", "output", type=click.Path(dir_okay=False), default=None)
@click.option("--testbench", is_flag=True, default=False, help="Emit stimuli and instances")
@click.pass_context
def rfsm(ctx: click.Context, file_path: str, output: str | None, testbench: bool) -> None:
    """Export a model as RFSM source."""
    from rfsm_light.exporters.rfsm import export_rfsm

    model = _load_checked(ctx, file_path, testbench)
    try:
        text = export_rfsm(model, testbench)
    except RfsmLightError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    if output:
        write_text_atomic(output, text)
        click.echo(f"Wrote {output}")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def info(ctx: click.Context, file_path: str) -> None:
    """Summarize the automatons of a model."""
    from rfsm_light.graph import summarize

    try:
        model = read_file(file_path)
    except RfsmLightError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    click.echo(f"Model {model.name or '(unnamed)'}: {len(model.ios)} IO(s)")
    for io in model.ios:
        click.echo(f"  {io.to_string()}")
    for a in model.automatons:
        s = summarize(a)
        click.echo(
            f"Automaton {s.name}: {len(s.states)} states, {s.transitions} transitions"
        )
        click.echo(f"  Initial state: {s.init_state or '(none)'}")
        if s.unreachable:
            click.echo(f"  Unreachable: {', '.join(s.unreachable)}")
        if s.terminal:
            click.echo(f"  Terminal: {', '.join(s.terminal)}")
        if s.cycles:
            click.echo(f"  Cycles detected: {len(s.cycles)}")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def fmt(ctx: click.Context, file_path: str) -> None:
    """Re-encode a model file in canonical form."""
    try:
        model = read_file(file_path)
    except RfsmLightError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return
    save_file(model, file_path)
    click.echo(f"Reformatted {file_path}")
