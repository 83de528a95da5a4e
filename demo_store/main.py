import os
import sys
import time
from pathlib import Path
from typing import List

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

app = FastAPI(
    title="Demo Store API",
    description="Catálogo externo de productos para el conector (almacenamiento en archivos JSON)",
    version="1.0.0"
)

DATA_PATH_ENV = "DEMO_STORE_DATA_PATH"


class Option(BaseModel):
    sku: str = ""
    id: str = ""


class Image(BaseModel):
    url: str = ""
    id: str = ""


class Product(BaseModel):
    name: str = ""
    id: str = ""
    options: List[Option] = Field(default_factory=list)
    images: List[Image] = Field(default_factory=list)

    def validate_required(self):
        """Reglas de la API: nombre obligatorio y al menos una opción"""
        if self.name == "":
            raise ValueError("product Name is required")
        if len(self.options) == 0:
            raise ValueError("product must have at least one option")


_products_adapter = TypeAdapter(List[Product])
_ids_adapter = TypeAdapter(List[str])

_last_id = 0


def new_id() -> str:
    """ID basado en el tiempo, estrictamente creciente dentro del proceso"""
    global _last_id
    _last_id = max(time.time_ns(), _last_id + 1)
    return str(_last_id)


def data_path() -> Path:
    path = os.environ.get(DATA_PATH_ENV, "")
    if not path:
        raise RuntimeError(f"{DATA_PATH_ENV} must be set to the data storage path")
    return Path(path)


def check_product_id(product_id: str):
    """El ID debe ser un nombre de archivo simple dentro del directorio de datos"""
    if product_id in ("", ".", "..") or Path(product_id).name != product_id or "\\" in product_id:
        raise ValueError(f"invalid product id: {product_id}")


def product_path(product_id: str) -> Path:
    check_product_id(product_id)
    return data_path() / f"{product_id}.json"


def response(status_code: int, data) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=data)


def product_files() -> List[Path]:
    return sorted(data_path().rglob("*.json"), key=str)


async def read_body(request: Request, adapter: TypeAdapter):
    raw = await request.body()
    return adapter.validate_json(raw)


@app.post("/products")
async def put_products(request: Request):
    """
    Crea o actualiza productos

    Asigna IDs a productos, opciones e imágenes que no lo tengan
    y guarda cada producto en <id>.json
    """
    try:
        products = await read_body(request, _products_adapter)
        for p in products:
            p.validate_required()
            if p.id:
                check_product_id(p.id)
    except (ValidationError, ValueError) as e:
        return response(400, str(e))

    for p in products:
        if p.id == "":
            p.id = new_id()
        for o in p.options:
            if o.id == "":
                o.id = new_id()
        for i in p.images:
            if i.id == "":
                i.id = new_id()

        try:
            product_path(p.id).write_text(p.model_dump_json(indent=4), encoding="utf-8")
        except (OSError, ValueError) as e:
            return response(400, str(e))

    return response(202, [p.model_dump() for p in products])


@app.get("/products")
async def get_products(request: Request):
    """Retorna los productos pedidos por ID, en el mismo orden"""
    try:
        ids = await read_body(request, _ids_adapter)
    except ValidationError as e:
        return response(400, str(e))

    products = []
    for product_id in ids:
        try:
            path = product_path(product_id)
            products.append(Product.model_validate_json(path.read_text(encoding="utf-8")))
        except (OSError, ValueError):
            return response(400, f"unable to read file: {product_id}.json")

    return response(202, [p.model_dump() for p in products])


@app.get("/products/page")
async def get_products_page(
    channel_product_code: str = Query("0", description="Último ID recibido"),
    limit: str = Query("10", description="Límite de registros"),
):
    """
    Lista productos ordenados por nombre de archivo

    La página empieza después del archivo <channel_product_code>.json
    """
    try:
        limit_value = int(limit)
    except ValueError:
        return response(400, "invalid limit")

    files = product_files()
    if limit_value == 0:
        return response(202, [])

    offset = 0
    if channel_product_code not in ("", "0"):
        for i, f in enumerate(files):
            if f.stem == channel_product_code:
                offset = i + 1
                break

    products = []
    for f in files[offset:offset + max(limit_value, 0)]:
        try:
            products.append(Product.model_validate_json(f.read_text(encoding="utf-8")))
        except (OSError, ValidationError):
            return response(400, f"unable to read file: {f}")

    return response(202, [p.model_dump() for p in products])


@app.delete("/products")
async def delete_products(request: Request):
    """Elimina los archivos de los productos indicados"""
    try:
        ids = await read_body(request, _ids_adapter)
    except ValidationError as e:
        return response(400, str(e))

    if not ids:
        return response(202, None)

    files = product_files()
    for product_id in ids:
        for f in files:
            if f.stem == product_id and f.exists():
                try:
                    f.unlink()
                except OSError as e:
                    return response(400, str(e))

    return response(202, None)


@app.delete("/clean")
async def cleanup_data_dir():
    """Elimina todos los productos"""
    for f in product_files():
        try:
            f.unlink()
        except OSError as e:
            return response(400, str(e))

    return response(202, None)


if __name__ == "__main__":
    if len(sys.argv) < 2 or not sys.argv[1]:
        sys.exit("data storage path must be specified as the first argument")
    os.environ[DATA_PATH_ENV] = sys.argv[1]

    uvicorn.run(
        "demo_store.main:app",
        host="0.0.0.0",
        port=8080,
        log_level="info"
    )
