"""
List licenses query handler.
"""
from typing import List

from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """Return every license, newest first, with creator name and email."""
        licenses = await self.license_repository.list_all()
        return [LicenseDTO.from_entity(license) for license in licenses]
