from fastapi import APIRouter, Depends, HTTPException
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error
from app.schemas.schemas import InventoryItem, InventoryCreate, InventoryUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

NOT_FOUND = "Inventory item not found"


@router.get("", response_model=list[InventoryItem])
def list_inventory(storage: Storage = Depends(get_storage)):
    with internal_error("Failed to retrieve inventory"):
        return storage.list_inventory_items()


@router.get("/{item_id}", response_model=InventoryItem)
def get_inventory_item(item_id: str, storage: Storage = Depends(get_storage)):
    iid = parse_id(item_id, NOT_FOUND)
    with internal_error("Failed to retrieve inventory item"):
        return get_or_404(storage.get_inventory_item(iid), NOT_FOUND)


@router.post("", response_model=InventoryItem, status_code=201)
def create_inventory_item(data: InventoryCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create inventory item"):
        return storage.create_inventory_item(data)


@router.put("/{item_id}", response_model=InventoryItem)
def update_inventory_item(item_id: str, data: InventoryUpdate, storage: Storage = Depends(get_storage)):
    iid = parse_id(item_id, NOT_FOUND)
    with internal_error("Failed to update inventory item"):
        return get_or_404(storage.update_inventory_item(iid, data), NOT_FOUND)


@router.delete("/{item_id}", status_code=204)
def delete_inventory_item(item_id: str, storage: Storage = Depends(get_storage)):
    iid = parse_id(item_id, NOT_FOUND)
    with internal_error("Failed to delete inventory item"):
        deleted = storage.delete_inventory_item(iid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
