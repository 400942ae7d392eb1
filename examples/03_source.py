"""
Read source code and create a class
"""
import asyncio
import os
from adtpy import AdtClient, ClassDetails, PartialCreateError


async def main():
    async with AdtClient() as adt:
        await adt.connect(os.environ["SAP_USER"], os.environ["SAP_PASSWORD"])

        # Program source by name
        print(await adt.get_source("program", "RSPARAM"))

        details = ClassDetails(
            name="ZCL_ADTPY_DEMO",
            description="Created by adtpy",
            package="$TMP",
            interfaces=["IF_OO_ADT_CLASSRUN"],
        )
        try:
            uri = await adt.create_class(details)
            print(f"Created {uri}")
            print(await adt.get_source("class", details.name))
        except PartialCreateError as e:
            # Class exists without its skeleton source
            print(f"Incomplete: {e.object_name} failed at {e.step}")


if __name__ == "__main__":
    asyncio.run(main())
