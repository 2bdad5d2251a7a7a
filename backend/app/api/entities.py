from backend.app.api.crud import build_crud_router
from backend.app.repositories.entities import (
    AwardRepository,
    CourseRepository,
    ProjectRepository,
    PublicationRepository,
    StudentRepository,
)

publications_router = build_crud_router("/api/publications", PublicationRepository, tags=["publications"])
projects_router = build_crud_router("/api/projects", ProjectRepository, tags=["projects"])
courses_router = build_crud_router("/api/courses", CourseRepository, tags=["courses"])
awards_router = build_crud_router("/api/awards", AwardRepository, tags=["awards"])
students_router = build_crud_router(
    "/api/students",
    StudentRepository,
    tags=["students"],
    list_filters=("category",),
)

routers = [publications_router, projects_router, courses_router, awards_router, students_router]
