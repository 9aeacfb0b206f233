from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.dependencies import get_current_identity, require_credential, get_task_creator, get_task_store
from app.schemas.task import TaskCreate, TaskOut, TaskPage, TaskUpdate
from app.services.identity import Identity
from app.services.task_creation import TaskCreator
from app.services.task_store import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/", response_model=TaskOut)
def create_task(
    task: TaskCreate,
    credential: str = Depends(require_credential),
    creator: TaskCreator = Depends(get_task_creator),
):
    return creator.handle(credential, task.title, task.description)


@router.get("/")
def list_tasks(
    q: Optional[str] = Query(None, description="Search by title"),
    page: Optional[int] = None,
    limit: Optional[int] = None,
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    """If page and limit are provided, return paginated result dict {items,page,limit,total,pages}.
    Otherwise return plain list for backward compatibility.
    """
    result = store.list(identity.user_id, q=q, page=page, limit=limit)
    if isinstance(result, dict):
        return TaskPage(**{**result, "items": [TaskOut.model_validate(t) for t in result["items"]]})
    return [TaskOut.model_validate(t) for t in result]


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, identity: Identity = Depends(get_current_identity), store: TaskStore = Depends(get_task_store)):
    return store.get(identity.user_id, task_id)


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    changes: TaskUpdate,
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    return store.update(identity.user_id, task_id, changes.model_dump(exclude_unset=True))


@router.delete("/{task_id}")
def delete_task(task_id: str, identity: Identity = Depends(get_current_identity), store: TaskStore = Depends(get_task_store)):
    store.delete(identity.user_id, task_id)
    return {"detail": "deleted"}
