from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List

from contactbook.services.contact_repository import ContactRecord, ContactRepository
from contactbook.schemas.contact import ContactCreateRequest, ContactUpdateRequest, ContactResponse
from contactbook.api.deps import get_repository

router = APIRouter(tags=["Contacts"])


def get_contact_or_404(contact_id: int, repo: ContactRepository) -> ContactRecord:
    contact = repo.get(contact_id)
    if not contact:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return contact


@router.get("/contacts.json", response_model=List[ContactResponse])
async def list_contacts(repo: ContactRepository = Depends(get_repository)):
    return repo.all()


@router.post("/contacts.json", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: ContactCreateRequest,
    repo: ContactRepository = Depends(get_repository)
):
    return repo.add(**payload.contact.model_dump())


@router.get("/contacts/{contact_id}.json", response_model=ContactResponse)
async def get_contact(
    contact_id: int,
    repo: ContactRepository = Depends(get_repository)
):
    return get_contact_or_404(contact_id, repo)


@router.api_route("/contacts/{contact_id}.json", methods=["PUT", "PATCH"], response_model=ContactResponse)
async def update_contact(
    contact_id: int,
    payload: ContactUpdateRequest,
    repo: ContactRepository = Depends(get_repository)
):
    contact = get_contact_or_404(contact_id, repo)

    update_data = payload.contact.model_dump(exclude_unset=True)
    return repo.update(contact, **update_data)


@router.delete("/contacts/{contact_id}.json", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    repo: ContactRepository = Depends(get_repository)
):
    contact = get_contact_or_404(contact_id, repo)
    repo.delete(contact)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
