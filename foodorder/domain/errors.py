# foodorder/domain/errors.py


class NotFoundError(LookupError):
    """Brak encji (danie, klient, zamowienie, restauracja) - mapowane na 404."""
