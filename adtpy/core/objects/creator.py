"""
Class creation.

Creation takes three dependent calls: name validation, the class
definition POST and the skeleton source PUT. A failure stops the
sequence. There is no rollback; a failure after the POST leaves the
class on the server without source.
"""
from typing import List
from urllib.parse import quote

from ..api import AsyncAPIClient
from ..exceptions import PartialCreateError
from ..logging import get_logger
from ..models import ClassDetails
from ..xml import build_class_document

VALIDATION_PATH = '/oo/validation/objectname'
CLASSES_PATH = '/oo/classes'
CLASS_CONTENT_TYPE = 'application/vnd.sap.adt.oo.classes.v2+xml'

STEP_VALIDATE = 'validate'
STEP_CREATE = 'create'
STEP_SOURCE = 'source'


def generate_class_source(details: ClassDetails) -> str:
    """Skeleton DEFINITION/IMPLEMENTATION for a new class."""
    inheriting = f"\n  INHERITING FROM {details.superclass}" if details.superclass else ''
    interfaces = '\n    '.join(f"INTERFACES {i}." for i in details.interfaces)
    return (
        f"CLASS {details.name} DEFINITION\n"
        f"  PUBLIC{inheriting}\n"
        f"  FINAL\n"
        f"  CREATE PUBLIC.\n"
        f"\n"
        f"  PUBLIC SECTION.\n"
        f"    {interfaces}\n"
        f"  PROTECTED SECTION.\n"
        f"  PRIVATE SECTION.\n"
        f"ENDCLASS.\n"
        f"\n"
        f"CLASS {details.name} IMPLEMENTATION.\n"
        f"ENDCLASS."
    )


class ClassCreator:
    """Creates ABAP classes with a generated skeleton."""

    def __init__(self, client: AsyncAPIClient):
        self._client = client
        self._logger = get_logger('adtpy.objects')

    async def create_class(self, details: ClassDetails) -> str:
        """
        Validate the name, create the class and upload its skeleton.

        Args:
            details: Class name, description, package, superclass, interfaces

        Returns:
            Service-relative URI of the new class

        Raises:
            ValueError: If name or package is empty
            HttpError: If validation or creation fails (nothing created)
            PartialCreateError: If the source upload fails after creation
        """
        if not details.name:
            raise ValueError("Class name must not be empty")
        if not details.package:
            raise ValueError("Package must not be empty")

        completed: List[str] = []

        await self._client.request(
            VALIDATION_PATH,
            'GET',
            headers={'Accept': 'application/json'},
            params={'objname': details.name, 'type': 'CLAS/OC'}
        )
        completed.append(STEP_VALIDATE)

        document = build_class_document(details)
        self._logger.info(f"Creating class {details.name} in package {details.package}")
        self._logger.debug(f"Class document: {document}")
        await self._client.request(
            CLASSES_PATH,
            'POST',
            document,
            headers={
                'Content-Type': CLASS_CONTENT_TYPE,
                'Accept': CLASS_CONTENT_TYPE,
            }
        )
        completed.append(STEP_CREATE)

        uri = f"{CLASSES_PATH}/{quote(details.name, safe='')}"
        try:
            await self._client.request(
                f"{uri}/source/main",
                'PUT',
                generate_class_source(details),
                headers={
                    'Content-Type': 'text/plain; charset=utf-8',
                    'Accept': 'text/plain',
                }
            )
        except Exception as e:
            self._logger.error(f"Class {details.name} created but source upload failed: {e}")
            raise PartialCreateError(STEP_SOURCE, completed, details.name, e) from e

        self._logger.info(f"Class {details.name} created")
        return uri
