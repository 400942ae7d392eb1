"""
Basic usage - Connect and list packages
"""
import asyncio
import os
from adtpy import AdtClient


async def main():
    # Host, port and client come from SAP_HOST / SAP_PORT / SAP_CLIENT
    async with AdtClient() as adt:
        info = await adt.connect(os.environ["SAP_USER"], os.environ["SAP_PASSWORD"])
        print(f"Connected to {info.url} as {info.username}")

        print("\nMain packages:")
        for package in await adt.list_root_packages():
            print(f"  {package.name:30} {package.description or ''}")


if __name__ == "__main__":
    asyncio.run(main())
