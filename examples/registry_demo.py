"""registry_demo.py"""
import asyncio

from rich.console import Console

from flagline import CommandRegistry
from flagline.exceptions import FlaglineError
from flagline.render import render_error, render_help
from flagline.shell import run_shell
from flagline.utils import setup_logging

from actions import deploy, greet

setup_logging(log_filename=None)
console = Console()

registry = CommandRegistry()
registry.define_command("greet", greet, "--name=text,World", "--times=number,1", "-s")
registry.define_command(
    "deploy",
    deploy,
    "--service",
    "--replicas=number,1",
    "--options=structured,{}",
    "-n",
    description="Deploy a service",
)
registry.lookup("greet").add_alias("--who", 0)


async def main() -> None:
    render_help(registry)
    for line in [
        'greet --who="Ada Lovelace" -s',
        "deploy --service=api --replicas=3 --options='{\"region\": \"eu\"}' -n",
        "deploy --service=api --replicas=three",
    ]:
        console.print(f"> {line}", markup=False)
        try:
            console.print(await registry.execute(line), markup=False)
        except FlaglineError as error:
            render_error(error, line)
    await run_shell(registry)


if __name__ == "__main__":
    asyncio.run(main())
