from __future__ import annotations

from typing import Any

from backend.app.core.errors import ValidationError, translate_storage_errors
from backend.app.models.award import Award
from backend.app.models.course import Course
from backend.app.models.project import Project
from backend.app.models.publication import Publication
from backend.app.models.student import Student
from backend.app.repositories.documents import DocumentRepository


class PublicationRepository(DocumentRepository):
    collection_name = "publications"
    label = "Publication"
    model = Publication
    sort = [("year", -1)]
    object_id_fields = ("pdfFileId",)


class ProjectRepository(DocumentRepository):
    collection_name = "projects"
    label = "Project"
    model = Project
    sort = [("order", 1)]
    object_id_fields = ("imageFileId",)


class CourseRepository(DocumentRepository):
    collection_name = "courses"
    label = "Course"
    model = Course
    sort = [("order", 1)]


class AwardRepository(DocumentRepository):
    collection_name = "awards"
    label = "Award"
    model = Award
    sort = [("year", -1)]


class StudentRepository(DocumentRepository):
    collection_name = "students"
    label = "Student"
    model = Student
    sort = [("startYear", -1), ("name", 1)]
    object_id_fields = ("publications", "projects")

    async def list(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        query = {k: v for k, v in (filters or {}).items() if k == "category" and v}
        return await super().list(query)

    async def check_references(self, doc: dict[str, Any]):
        for field_name, repo_cls in (("publications", PublicationRepository), ("projects", ProjectRepository)):
            wanted = set(doc.get(field_name) or [])
            if not wanted:
                continue
            with translate_storage_errors(f"checking {field_name} references"):
                found = await self.db[repo_cls.collection_name].count_documents({"_id": {"$in": list(wanted)}})
            if found != len(wanted):
                raise ValidationError(
                    f"Invalid student: {field_name} references a missing record",
                    fields=[field_name],
                )
