"""
Todo API endpoints
"""
import logging
from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_or_404
from app.core.redis_client import RedisClient, get_redis
from app.crud.todo import todo as crud_todo
from app.db.session import get_db
from app.models.todo import Todo
from app.schemas.todo import TodoCreate, TodoListResponse, TodoResponse, TodoUpdate
from app.services.todo_ordering import is_overdue, split_todos

logger = logging.getLogger(__name__)

router = APIRouter()


def to_response(todo: Todo, today: date) -> TodoResponse:
    response = TodoResponse.model_validate(todo)
    response.is_overdue = is_overdue(todo, today)
    return response


@router.get("/", response_model=TodoListResponse)
def get_todos(db: Session = Depends(get_db)):
    """
    Get todos split into open (high priority first) and completed
    """
    today = date.today()
    active, completed = split_todos(crud_todo.get_multi(db=db))
    return TodoListResponse(
        active=[to_response(todo, today) for todo in active],
        completed=[to_response(todo, today) for todo in completed],
    )


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(todo_id: int, db: Session = Depends(get_db)):
    return to_response(get_or_404(crud_todo, db, todo_id, "Todo"), date.today())


@router.post("/",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_todo(
    todo_in: TodoCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Create new todo
    """
    todo = crud_todo.create(db=db, obj_in=todo_in)
    announce(background_tasks, redis, "todos")
    return to_response(todo, date.today())


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    todo_in: TodoUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    todo = get_or_404(crud_todo, db, todo_id, "Todo")
    todo = crud_todo.update(db=db, db_obj=todo, obj_in=todo_in)
    announce(background_tasks, redis, "todos")
    return to_response(todo, date.today())


@router.post("/{todo_id}/toggle", response_model=TodoResponse)
def toggle_todo(
    todo_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Flip the completed flag
    """
    todo = get_or_404(crud_todo, db, todo_id, "Todo")
    todo = crud_todo.update(db=db, db_obj=todo, obj_in={"is_completed": not todo.is_completed})
    logger.debug(f"Todo {todo.id} completed: {todo.is_completed}")
    announce(background_tasks, redis, "todos")
    return to_response(todo, date.today())


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(
    todo_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    get_or_404(crud_todo, db, todo_id, "Todo")
    crud_todo.delete(db=db, id=todo_id)
    announce(background_tasks, redis, "todos")
    return None
