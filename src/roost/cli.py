"""CLI entry point for roost."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from roost.app_context import AppContext
from roost.commands.add import add
from roost.commands.delete import delete
from roost.commands.get import get
from roost.commands.init import init
from roost.commands.list import list_
from roost.commands.uninstall import uninstall
from roost.config import Config
from roost.log import setup_logging
from roost.output import Output
from roost.vault import Vault

app = TyperPlus(package_name="roost")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", envvar="ROOST_DATA_DIR", help="Data directory path.")] = None,
) -> None:
    """Find your passwords from the terminal."""
    cfg = Config.build(data_dir)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path)
    ctx.obj = AppContext(out=Output(json_mode=json_output), vault=Vault(cfg.vault_path), cfg=cfg)


# Setup
app.command()(init)
app.command()(uninstall)

# Credentials
app.command(aliases=["g"])(get)
app.command("list", aliases=["l"])(list_)
app.command()(add)
app.command()(delete)
