from inventory_api.db.repositories.models import ModelsRepository
from inventory_api.db.repositories.users import UsersRepository
from inventory_api.db.repositories.purchases import PurchasesRepository

__all__ = ["ModelsRepository", "UsersRepository", "PurchasesRepository"]
