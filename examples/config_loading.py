"""config_loading.py"""
import asyncio

from flagline.config import load_registry
from flagline.shell import run_shell

registry = load_registry("flagline.yaml")

if __name__ == "__main__":
    asyncio.run(run_shell(registry))
