"""Heading and column labels used in generated documents."""

from typing import Literal, NamedTuple, TypeAlias

Language: TypeAlias = Literal["en", "ru"]


class Labels(NamedTuple):
    """Fixed wording of a generated document."""

    title: str
    table: str
    column_name: str
    data_type: str
    size: str
    nullable: str
    description: str
    diagrams: str
    diagram: str


LABELS: dict[Language, Labels] = {
    "en": Labels(
        title="Database documentation",
        table="Table",
        column_name="Column name",
        data_type="Data type",
        size="Size",
        nullable="Nullable",
        description="Description",
        diagrams="Relationship diagrams",
        diagram="Diagram for entity",
    ),
    "ru": Labels(
        title="Документация по базе данных",
        table="Таблица",
        column_name="Имя колонки",
        data_type="Тип данных",
        size="Размер",
        nullable="Допускает NULL",
        description="Описание",
        diagrams="Диаграмма связей",
        diagram="Диаграмма для сущности",
    ),
}
