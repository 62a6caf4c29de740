# backend/luz/routes/customers.py
"""
Customer and child routes.

Endpoints:
    GET /customers/{customer_id} - Customer with studio, children and booking total
    PATCH /customers/{customer_id} - Partial update
    DELETE /customers/{customer_id} - Delete with children, bookings and invites
    POST /customers/{customer_id}/children - Add a child
    GET /customers/{customer_id}/children - Children with booking counts
    GET /children/{child_id} - Child with customer and studio details
    PATCH /children/{child_id} - Partial update
    DELETE /children/{child_id} - Delete with bookings
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from ..api.dependencies import get_current_user, get_customer_service
from ..core.exceptions import DomainException
from ..models.user import User
from ..schemas.customer import (
    ChildCreate,
    ChildDeleteResponse,
    ChildDetailResponse,
    ChildListItem,
    ChildResponse,
    ChildUpdate,
    CustomerDeleteResponse,
    CustomerDetailResponse,
    CustomerResponse,
    CustomerUpdate,
)
from ..services.customer_service import CustomerService
from .common import ensure_ulid, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["customers"])


@router.get("/customers/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer(
    customer_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerDetailResponse:
    ensure_ulid(customer_id, "customer")
    try:
        details = await asyncio.to_thread(
            customer_service.get_customer, current_user, customer_id
        )
        return CustomerDetailResponse.model_validate(details)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/customers/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    ensure_ulid(customer_id, "customer")
    try:
        customer = await asyncio.to_thread(
            customer_service.update_customer, current_user, customer_id, payload
        )
        return CustomerResponse.model_validate(customer)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/customers/{customer_id}", response_model=CustomerDeleteResponse)
async def delete_customer(
    customer_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerDeleteResponse:
    ensure_ulid(customer_id, "customer")
    try:
        result = await asyncio.to_thread(
            customer_service.delete_customer, current_user, customer_id
        )
        return CustomerDeleteResponse.model_validate(result)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/customers/{customer_id}/children",
    response_model=ChildResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_child(
    customer_id: str,
    payload: ChildCreate,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> ChildResponse:
    ensure_ulid(customer_id, "customer")
    try:
        child = await asyncio.to_thread(
            customer_service.create_child, current_user, customer_id, payload
        )
        return ChildResponse.model_validate(child)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/customers/{customer_id}/children", response_model=List[ChildListItem])
async def list_children(
    customer_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> List[ChildListItem]:
    ensure_ulid(customer_id, "customer")
    try:
        rows = await asyncio.to_thread(customer_service.list_children, current_user, customer_id)
        return [ChildListItem.model_validate(row) for row in rows]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/children/{child_id}", response_model=ChildDetailResponse)
async def get_child(
    child_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> ChildDetailResponse:
    ensure_ulid(child_id, "child")
    try:
        details = await asyncio.to_thread(customer_service.get_child, current_user, child_id)
        return ChildDetailResponse.model_validate(details)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/children/{child_id}", response_model=ChildResponse)
async def update_child(
    child_id: str,
    payload: ChildUpdate,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> ChildResponse:
    ensure_ulid(child_id, "child")
    try:
        child = await asyncio.to_thread(
            customer_service.update_child, current_user, child_id, payload
        )
        return ChildResponse.model_validate(child)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/children/{child_id}", response_model=ChildDeleteResponse)
async def delete_child(
    child_id: str,
    current_user: User = Depends(get_current_user),
    customer_service: CustomerService = Depends(get_customer_service),
) -> ChildDeleteResponse:
    ensure_ulid(child_id, "child")
    try:
        result = await asyncio.to_thread(customer_service.delete_child, current_user, child_id)
        return ChildDeleteResponse.model_validate(result)
    except DomainException as e:
        handle_domain_exception(e)
