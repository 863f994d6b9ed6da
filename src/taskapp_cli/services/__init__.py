"""Service layer for taskapp.

Services sit between the command layer and the repository ports:
- TaskListPresenter drives the list screen (load, search, delete)
- TaskService is the edit flow (load and save single tasks)
- ConfigService owns configuration and the storage strategy
"""

from .task_list_presenter import TaskListPresenter, TaskListView, TaskNavigator
from .task_service import TaskService

__all__ = [
    "TaskListPresenter",
    "TaskListView",
    "TaskNavigator",
    "TaskService",
]
