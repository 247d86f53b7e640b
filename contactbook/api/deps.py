from contactbook.services.contact_repository import ContactRepository, repository


def get_repository() -> ContactRepository:
    return repository
