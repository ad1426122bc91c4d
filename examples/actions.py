"""actions.py"""
import asyncio


def greet(name: str, times: int, shout: bool) -> str:
    message = " ".join([f"Hello, {name}!"] * int(times))
    return message.upper() if shout else message


async def deploy(service: str, replicas: int, options: dict | None, dry_run: bool) -> str:
    await asyncio.sleep(0.1)
    prefix = "[dry-run] " if dry_run else ""
    return f"{prefix}Deployed {service} x{replicas} with {options or {}}"
