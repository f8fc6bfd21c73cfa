"""Product API router with CRUD operations."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from starlette.responses import JSONResponse

from src.product_api.api.http.deps import get_product_service
from src.product_api.core.exceptions import (
    ProductIdMismatchError,
    ProductNotFoundError,
    ProductValidationError,
    StoreUnavailableError,
)
from src.product_api.core.services import ProductService
from src.product_api.entities.product import DECIMAL_MAX, ProductDTO

router = APIRouter(prefix="/api/products", tags=["products"])


def problem(status_code: int, title: str, detail: str) -> JSONResponse:
    """Build an RFC 7807 problem details response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "type": "about:blank",
            "title": title,
            "status": status_code,
            "detail": detail,
        },
        media_type="application/problem+json",
    )


@router.get("", response_model=list[ProductDTO])
def list_products(
    min_price: Decimal = Query(Decimal(0), alias="minPrice"),
    max_price: Decimal = Query(DECIMAL_MAX, alias="maxPrice"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductDTO]:
    """List products priced between minPrice and maxPrice, inclusive."""
    try:
        return service.list_products(min_price, max_price)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("/{product_id}", response_model=ProductDTO)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> ProductDTO:
    """Get a product by ID."""
    try:
        return service.get_product(product_id)
    except (ProductNotFoundError, StoreUnavailableError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", response_model=ProductDTO, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductDTO,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
):
    """Create a new product; any id in the body is ignored."""
    try:
        created = service.create_product(product)
    except ProductValidationError as e:
        raise HTTPException(status_code=400, detail=e.issues) from e
    except StoreUnavailableError as e:
        return problem(500, "Product store unavailable", str(e))

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=created.id)
    )
    return created


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_product(
    product_id: int,
    product: ProductDTO,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Replace name, description and price of a product."""
    try:
        service.update_product(product_id, product)
    except ProductIdMismatchError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ProductValidationError as e:
        raise HTTPException(status_code=400, detail=e.issues) from e
    except (ProductNotFoundError, StoreUnavailableError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Delete a product."""
    try:
        service.delete_product(product_id)
    except (ProductNotFoundError, StoreUnavailableError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
