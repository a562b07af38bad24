from __future__ import annotations

from typing import Any

from fastapi import APIRouter


def build_router(core: Any) -> APIRouter:
    router = APIRouter()

    @router.get("/dashboard/overview")
    def dashboard_overview():
        return core._dashboard_overview_impl(deps=core._performance_summary_deps())

    @router.get("/dashboard/assignments")
    def dashboard_assignments():
        return core._assignment_stats_impl(deps=core._performance_summary_deps())

    @router.get("/dashboard/students")
    def dashboard_students():
        return core._student_stats_impl(deps=core._performance_summary_deps())

    @router.get("/dashboard/classes")
    def dashboard_classes():
        return core._class_stats_impl(deps=core._performance_summary_deps())

    @router.get("/dashboard/top-performers")
    def dashboard_top_performers(limit: int = 0):
        return core._top_performers_impl(limit, deps=core._performance_summary_deps())

    return router
