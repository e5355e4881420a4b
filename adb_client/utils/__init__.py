import datetime as dt
from typing import Any

import typer
from rich import print as rich_print
from rich import reconfigure

reconfigure(soft_wrap=True)


def format_adb_message(message: Any) -> str:
    formatted_time = dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    formatted_message = f"[blue]\\[adb][/blue][{formatted_time}] {message}"
    return formatted_message


def adb_echo(message: Any):
    formatted_message = format_adb_message(message)
    try:
        rich_print(formatted_message)
    except (UnicodeDecodeError, UnicodeEncodeError, UnicodeError):
        # fallback to the standard print behaviour
        formatted_time = dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        formatted_message = f"[adb][{formatted_time}] {message}"
        typer.echo(formatted_message)
