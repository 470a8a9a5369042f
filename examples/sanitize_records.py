#!/usr/bin/env python3
"""
Sanitizing nested records with SpelunkLib.

This example demonstrates:
- Declaring field operations as annotations
- Handlers that read arguments from their directive
- Redacting secrets held in a mapping through Ref cells
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from spelunklib import Ref, Spelunker, parse_directive, tagged, zeroer


@dataclass
class Credential:
    user: str = tagged("trim,lower", default="")
    token: str = tagged("secret", default="")


@dataclass
class Service:
    name: str = tagged("trim,truncate:12", default="")
    replicas: int = tagged("min:1", default=0)
    credentials: Dict[str, Ref] = field(default_factory=dict)
    aliases: List[str] = field(default_factory=list)


def trim(name, path, directive, handle):
    handle.set(handle.value.strip())


def lower(name, path, directive, handle):
    handle.set(handle.value.lower())


def truncate(name, path, directive, handle):
    limit = int(parse_directive(directive).argument)
    handle.set(handle.value[:limit])


def minimum(name, path, directive, handle):
    bound = int(parse_directive(directive).argument)
    if handle.value < bound:
        print(f"  raising {path} from {handle.value} to {bound}")
        handle.set(bound)


def main():
    """Sanitize a service description in place."""
    service = Service(
        name="  payment-gateway-eu-west  ",
        credentials={
            "primary": Ref(Credential(user="  Admin ", token="s3cr3t")),
            "backup": Ref(Credential(user="OPS", token="hunter2")),
        },
    )

    print(f"Before: {service}")
    print("-" * 50)

    spelunker = (
        Spelunker()
        .set_handlers({
            "trim": trim,
            "lower": lower,
            "truncate": truncate,
            "min": minimum,
            "secret": zeroer,
        })
    )
    spelunker.spelunk(service)

    print("-" * 50)
    print(f"After: {service}")


if __name__ == "__main__":
    main()
