"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from billwise.api.dependencies import (
    get_read_uow,
    get_register_product_use_case,
    get_update_product_use_case,
)
from billwise.application.dto.requests import CreateProductRequest, UpdateProductRequest
from billwise.application.dto.responses import (
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
)
from billwise.application.use_cases import (
    RegisterProductUseCase,
    UpdateProductUseCase,
    product_to_response,
)
from billwise.core.exceptions import ProductNotFoundError
from billwise.core.interfaces import IUnitOfWork

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def register_product(
    request: CreateProductRequest,
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
) -> ProductResponse:
    """Add a product to the catalog."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=ProductListResponse)
async def list_products(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    uow: IUnitOfWork = Depends(get_read_uow),
) -> ProductListResponse:
    """List the catalog ordered by SKU."""
    products = await uow.products.list_products(limit=limit, offset=offset)
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        count=len(products),
    )


@router.get("/low-stock", response_model=ProductListResponse)
async def list_low_stock(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    uow: IUnitOfWork = Depends(get_read_uow),
) -> ProductListResponse:
    """Products at or below their minimum stock level."""
    products = await uow.products.list_low_stock(limit=limit, offset=offset)
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        count=len(products),
    )


@router.get(
    "/{sku}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    sku: str,
    uow: IUnitOfWork = Depends(get_read_uow),
) -> ProductResponse:
    """Get a product by SKU."""
    product = await uow.products.find_by_sku(sku)
    if product is None:
        raise ProductNotFoundError(sku)
    return product_to_response(product)


@router.patch(
    "/{sku}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_product(
    sku: str,
    request: UpdateProductRequest,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Change price, stock level, threshold or name."""
    result = await use_case.execute(sku, request)
    return use_case.to_response(result)
