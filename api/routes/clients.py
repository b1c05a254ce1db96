"""
Client API routes for ClientBook.

These handlers are the command layer: they are the only code that mutates
the model, they persist the address book after each successful change, and
they keep the displayed client in sync after edits and deletes.

Clients are addressed by their 1-based index in the current sorted/filtered
view, as shown to the user.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from api.routes.client_models import (
    ClientCreateRequest,
    ClientListResponse,
    ClientResponse,
    ClientUpdateRequest,
    DisplayClientResponse,
    PolicyRequest,
    ReminderListResponse,
    RemindersResponse,
    ViewRequest,
)
from api.services.model_manager import ModelManager
from api.services.person import Person, Priority
from api.services.person_filters import (
    HasPolicyPredicate,
    NameContainsKeywordsPredicate,
    PriorityPredicate,
    TagContainsKeywordsPredicate,
    all_of,
    comparator_for,
)
from api.services.storage import StorageManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["clients"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_model(request: Request) -> ModelManager:
    return request.app.state.model


def get_storage(request: Request) -> StorageManager:
    return request.app.state.storage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _person_at(model: ModelManager, index: int) -> Person:
    persons = model.get_sorted_filtered_person_list().to_list()
    if index < 1 or index > len(persons):
        raise HTTPException(status_code=404, detail=f"No client at index {index}")
    return persons[index - 1]


def _save(model: ModelManager, storage: StorageManager) -> None:
    """
    Persist the address book after a successful change.

    A failed write does not undo the change: the in-memory model keeps it
    and the next successful save writes it out. The 500 detail says so.
    """
    try:
        storage.save_address_book(model.get_address_book())
    except OSError as e:
        logger.error(f"Could not save data to {storage.address_book_file_path}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Change applied but not saved (kept in memory until the next successful save): {e}",
        )


def _list_response(model: ModelManager) -> ClientListResponse:
    view = model.get_sorted_filtered_person_list()
    clients = [ClientResponse.from_person(p) for p in view]
    display = model.get_display_client()
    return ClientListResponse(
        clients=clients,
        total=len(clients),
        sort=view.comparator.name,
        display_client=ClientResponse.from_person(display) if display else None,
    )


def _display_response(model: ModelManager) -> DisplayClientResponse:
    display = model.get_display_client()
    return DisplayClientResponse(
        display_client=ClientResponse.from_person(display) if display else None
    )


def _replace_display_client(model: ModelManager, target: Person, edited: Person) -> None:
    if model.get_display_client() == target:
        model.set_display_client(edited)


# ---------------------------------------------------------------------------
# Routes (static paths come before /{index})
# ---------------------------------------------------------------------------

@router.get("", response_model=ClientListResponse)
async def list_clients(model: ModelManager = Depends(get_model)):
    """List clients in the current view."""
    return _list_response(model)


@router.put("/view", response_model=ClientListResponse)
async def update_view(request: ViewRequest, model: ModelManager = Depends(get_model)):
    """Replace the filter and optionally the sort order, then display the first match."""
    predicates = []
    if request.keywords:
        predicates.append(NameContainsKeywordsPredicate(tuple(request.keywords)))
    if request.tags:
        predicates.append(TagContainsKeywordsPredicate(tuple(request.tags)))
    if request.priority:
        predicates.append(PriorityPredicate(Priority.parse(request.priority)))
    if request.policy_id:
        predicates.append(HasPolicyPredicate(request.policy_id))

    comparator = comparator_for(request.sort) if request.sort else None

    model.update_filtered_person_list(all_of(*predicates))
    if comparator is not None:
        model.update_sort_person_comparator(comparator)
    model.set_display_client_as_first_in_sorted_filtered_person_list()
    return _list_response(model)


@router.post("", response_model=ClientResponse)
async def add_client(
    request: ClientCreateRequest,
    model: ModelManager = Depends(get_model),
    storage: StorageManager = Depends(get_storage),
):
    """Add a new client and display them."""
    person = request.to_person()
    model.add_person(person)
    model.set_display_client(person)
    _save(model, storage)
    return ClientResponse.from_person(person)


@router.get("/reminders", response_model=RemindersResponse)
async def get_reminders(model: ModelManager = Depends(get_model)):
    """Overdue follow-ups, scheduled meetings and upcoming birthdays."""
    return RemindersResponse(
        last_met=ReminderListResponse.from_reminder_list(model.get_overdue_last_met()),
        schedules=ReminderListResponse.from_reminder_list(model.get_schedules()),
        birthdays=ReminderListResponse.from_reminder_list(model.get_birthday_reminders()),
    )


@router.get("/display", response_model=DisplayClientResponse)
async def get_display_client(model: ModelManager = Depends(get_model)):
    return _display_response(model)


@router.put("/display/{index}", response_model=DisplayClientResponse)
async def set_display_client(index: int, model: ModelManager = Depends(get_model)):
    """Display the client at the given view index."""
    model.set_display_client(_person_at(model, index))
    return _display_response(model)


@router.delete("/display", response_model=DisplayClientResponse)
async def clear_display_client(model: ModelManager = Depends(get_model)):
    model.clear_display_client()
    return _display_response(model)


@router.get("/{index}", response_model=ClientResponse)
async def get_client(index: int, model: ModelManager = Depends(get_model)):
    return ClientResponse.from_person(_person_at(model, index))


@router.put("/{index}", response_model=ClientResponse)
async def edit_client(
    index: int,
    request: ClientUpdateRequest,
    model: ModelManager = Depends(get_model),
    storage: StorageManager = Depends(get_storage),
):
    """Edit the client at the given view index."""
    target = _person_at(model, index)
    edited = request.apply_to(target)
    model.set_person(target, edited)
    _replace_display_client(model, target, edited)
    _save(model, storage)
    return ClientResponse.from_person(edited)


@router.delete("/{index}")
async def delete_client(
    index: int,
    model: ModelManager = Depends(get_model),
    storage: StorageManager = Depends(get_storage),
):
    """Delete the client at the given view index."""
    target = _person_at(model, index)
    model.delete_person(target)
    if model.get_display_client() == target:
        model.set_display_client_as_first_in_sorted_filtered_person_list()
    _save(model, storage)
    return {"status": "deleted", "name": target.name}


@router.post("/{index}/policies", response_model=ClientResponse)
async def add_policy(
    index: int,
    request: PolicyRequest,
    model: ModelManager = Depends(get_model),
    storage: StorageManager = Depends(get_storage),
):
    """Attach a policy to the client at the given view index."""
    target = _person_at(model, index)
    edited = model.add_policy(target, request.to_policy())
    _replace_display_client(model, target, edited)
    _save(model, storage)
    return ClientResponse.from_person(edited)


@router.delete("/{index}/policies/{policy_id}", response_model=ClientResponse)
async def delete_policy(
    index: int,
    policy_id: str,
    model: ModelManager = Depends(get_model),
    storage: StorageManager = Depends(get_storage),
):
    """Remove a policy from the client at the given view index."""
    target = _person_at(model, index)
    edited = model.delete_policy(target, policy_id)
    _replace_display_client(model, target, edited)
    _save(model, storage)
    return ClientResponse.from_person(edited)
