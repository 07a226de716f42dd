"""Relational catalog storage backed by SQLAlchemy ORM entities."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import (
    JSON,
    Engine,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
    delete,
    event,
    func,
    select,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
    sessionmaker,
)
from sqlalchemy.pool import StaticPool

from src.exceptions import ProductValidationError
from src.models.product import Price, Product, Warehouse
from src.models.supplier import Supplier
from src.services.storage.base import (
    CatalogStore,
    ProductRepository,
    SupplierRepository,
)

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class SupplierEntity(Base):
    __tablename__ = "suppliers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    contact_phone: Mapped[str | None] = mapped_column(String(64))
    country: Mapped[str | None] = mapped_column(String(128), index=True)
    region: Mapped[str | None] = mapped_column(String(128), index=True)

    products: Mapped[list[ProductEntity]] = relationship(
        back_populates="supplier",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<SupplierEntity(id={self.id}, name='{self.name}')>"


class ProductEntity(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Embedded price
    price_base: Mapped[float | None] = mapped_column(Float)
    price_tax: Mapped[float | None] = mapped_column(Float)
    price_tax_rate: Mapped[float | None] = mapped_column(Float)

    discounts: Mapped[list[str]] = mapped_column(JSON, default=list)
    images: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    kilos: Mapped[float | None] = mapped_column(Float)
    volume: Mapped[str | None] = mapped_column(String(128))
    quantity: Mapped[int | None] = mapped_column(Integer)
    stock: Mapped[int | None] = mapped_column(Integer)
    warehouse_location: Mapped[str | None] = mapped_column(String(255))
    suppliers_regions: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    supplier_id: Mapped[str | None] = mapped_column(
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        index=True,
    )
    supplier: Mapped[SupplierEntity | None] = relationship(back_populates="products")

    def __repr__(self):
        return f"<ProductEntity(id={self.id}, name='{self.name}', slug='{self.slug}')>"


def _product_to_entity(product: Product) -> ProductEntity:
    price = product.price or Price()
    return ProductEntity(
        id=product.id,
        name=product.name,
        slug=product.slug,
        price_base=price.base,
        price_tax=price.tax,
        price_tax_rate=price.tax_rate,
        discounts=list(product.discounts),
        images={key: image.model_dump() for key, image in product.images.items()},
        kilos=product.kilos,
        volume=product.volume,
        quantity=product.quantity,
        stock=product.stock,
        warehouse_location=product.warehouse.location if product.warehouse else None,
        suppliers_regions={
            region: descriptor.model_dump()
            for region, descriptor in product.suppliers_regions.items()
        },
        supplier_id=product.supplier_id,
    )


def _entity_to_product(entity: ProductEntity) -> Product:
    has_price = any(
        value is not None
        for value in (entity.price_base, entity.price_tax, entity.price_tax_rate)
    )
    return Product(
        id=entity.id,
        name=entity.name,
        slug=entity.slug,
        price=(
            Price(
                base=entity.price_base,
                tax=entity.price_tax,
                tax_rate=entity.price_tax_rate,
            )
            if has_price
            else None
        ),
        discounts=entity.discounts or [],
        images=entity.images or {},
        kilos=entity.kilos,
        volume=entity.volume,
        quantity=entity.quantity,
        stock=entity.stock,
        warehouse=(
            Warehouse(location=entity.warehouse_location)
            if entity.warehouse_location is not None
            else None
        ),
        suppliers_regions=entity.suppliers_regions or {},
        supplier_id=entity.supplier_id,
    )


def _supplier_to_entity(supplier: Supplier) -> SupplierEntity:
    return SupplierEntity(**supplier.model_dump())


def _entity_to_supplier(entity: SupplierEntity) -> Supplier:
    return Supplier(
        id=entity.id,
        name=entity.name,
        contact_email=entity.contact_email,
        contact_phone=entity.contact_phone,
        country=entity.country,
        region=entity.region,
    )


class SqlProductRepository(ProductRepository):
    """Product repository issuing one transaction per call."""

    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def find_all(self) -> list[Product]:
        with self._sessions.begin() as session:
            rows = session.scalars(select(ProductEntity).order_by(ProductEntity.id))
            return [_entity_to_product(row) for row in rows]

    def find_by_id(self, product_id: str) -> Product | None:
        with self._sessions.begin() as session:
            entity = session.get(ProductEntity, product_id)
            return _entity_to_product(entity) if entity is not None else None

    def find_by_slug(self, slug: str) -> Product | None:
        with self._sessions.begin() as session:
            entity = session.scalars(
                select(ProductEntity).where(ProductEntity.slug == slug)
            ).first()
            return _entity_to_product(entity) if entity is not None else None

    def find_by_supplier(self, supplier_id: str) -> list[Product]:
        with self._sessions.begin() as session:
            rows = session.scalars(
                select(ProductEntity)
                .where(ProductEntity.supplier_id == supplier_id)
                .order_by(ProductEntity.id)
            )
            return [_entity_to_product(row) for row in rows]

    def save(self, product: Product) -> Product:
        try:
            with self._sessions.begin() as session:
                entity = session.merge(_product_to_entity(product))
                session.flush()
                return _entity_to_product(entity)
        except IntegrityError as error:
            # Unique slug or supplier foreign key, enforced by the database.
            owner = self.find_by_slug(product.slug)
            if owner is not None and owner.id != product.id:
                raise ProductValidationError.slug_taken(product.slug, owner.id) from error
            if product.supplier_id is not None:
                raise ProductValidationError.unknown_supplier(
                    product.supplier_id
                ) from error
            raise

    def delete_by_id(self, product_id: str) -> None:
        with self._sessions.begin() as session:
            session.execute(delete(ProductEntity).where(ProductEntity.id == product_id))

    def delete_by_slug(self, slug: str) -> None:
        with self._sessions.begin() as session:
            session.execute(delete(ProductEntity).where(ProductEntity.slug == slug))

    def count(self) -> int:
        with self._sessions.begin() as session:
            return session.scalar(select(func.count()).select_from(ProductEntity)) or 0


class SqlSupplierRepository(SupplierRepository):
    """Supplier repository issuing one transaction per call."""

    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def find_all(self) -> list[Supplier]:
        with self._sessions.begin() as session:
            rows = session.scalars(select(SupplierEntity).order_by(SupplierEntity.id))
            return [_entity_to_supplier(row) for row in rows]

    def find_by_id(self, supplier_id: str) -> Supplier | None:
        with self._sessions.begin() as session:
            entity = session.get(SupplierEntity, supplier_id)
            return _entity_to_supplier(entity) if entity is not None else None

    def find_by_country(self, country: str) -> list[Supplier]:
        return self._find_where(SupplierEntity.country == country)

    def find_by_region(self, region: str) -> list[Supplier]:
        return self._find_where(SupplierEntity.region == region)

    def save(self, supplier: Supplier) -> Supplier:
        with self._sessions.begin() as session:
            entity = session.merge(_supplier_to_entity(supplier))
            session.flush()
            return _entity_to_supplier(entity)

    def _find_where(self, criterion) -> list[Supplier]:
        with self._sessions.begin() as session:
            rows = session.scalars(
                select(SupplierEntity).where(criterion).order_by(SupplierEntity.id)
            )
            return [_entity_to_supplier(row) for row in rows]


class SqlCatalogStore(CatalogStore):
    """Catalog persisted in a relational database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        Base.metadata.create_all(engine)
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)
        self.products = SqlProductRepository(self._sessions)
        self.suppliers = SqlSupplierRepository(self._sessions)

    @property
    def backend(self) -> str:
        return "sql"

    def delete_supplier(self, supplier_id: str) -> int:
        # Owned products go first, in the same transaction as the supplier.
        with self._sessions.begin() as session:
            removed = session.execute(
                delete(ProductEntity).where(ProductEntity.supplier_id == supplier_id)
            ).rowcount
            session.execute(delete(SupplierEntity).where(SupplierEntity.id == supplier_id))

        logger.info(
            "Deleted supplier %s with %d owned products", supplier_id, removed or 0
        )
        return removed or 0

    def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(select(1))
        except Exception:
            logger.exception("Database ping failed")
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_sql_store(database_url: str, echo: bool = False) -> SqlCatalogStore:
    """Build a SQL store for the given SQLAlchemy URL."""

    url = make_url(database_url)
    engine_options: dict[str, Any] = {"echo": echo}
    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite:
        engine_options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # A single shared connection keeps the in-memory database alive.
            engine_options["poolclass"] = StaticPool

    engine = create_engine(url, **engine_options)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.info("Connected SQL catalog store to %s", url.render_as_string(hide_password=True))
    return SqlCatalogStore(engine)
