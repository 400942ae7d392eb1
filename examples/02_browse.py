"""
Browse a package by facets - package, group, type, object
"""
import asyncio
import os
import sys
from adtpy import AdtClient


async def show(adt, package, nodes, parent=None, indent=1):
    for node in nodes:
        print(f"{'  ' * indent}{node.display_name} [{node.facet}] ({node.counter})")
        if node.is_expandable and indent < 4:
            children = await adt.expand(node, package, parent)
            await show(adt, package, children, node, indent + 1)


async def main():
    package = sys.argv[1] if len(sys.argv) > 1 else "$TMP"

    async with AdtClient() as adt:
        await adt.connect(os.environ["SAP_USER"], os.environ["SAP_PASSWORD"])

        print(package)
        await show(adt, package, await adt.get_root_package_contents(package))


if __name__ == "__main__":
    asyncio.run(main())
