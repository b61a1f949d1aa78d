"""
Canonical values accepted by the expense store.

List order is significant: within a matching tier the first entry wins,
so entries must stay in this order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


CONTRATOS: Tuple[str, ...] = (
    "BB DIVINÓPOLIS",
    "BB MATO GROSSO",
    "BB MATO GROSSO DO SUL",
    "BB MATO GROSSO LOTE 2",
    "BB SALINAS",
    "BB SÃO PAULO",
    "BB VALADARES",
    "BB VARGINHA",
    "CARRO ENGENHARIA MS",
    "CORREIOS - GO",
    "ESCRITÓRIO",
    "IMPOSTO",
    "SECRETARIA DA ADMINISTRAÇÃO",
    "SECRETARIA DA ECONOMIA",
    "SECRETARIA DA SAÚDE",
)

CATEGORIAS: Tuple[str, ...] = (
    "ADIANTAMENTO",
    "ALIMENTAÇÃO",
    "ALUGUEL DE EQUIPAMENTOS",
    "ALUGUEL DE VEÍCULO",
    "ART",
    "ASSESSORIA JURÍDICA",
    "COMBUSTÍVEL",
    "CONFRATERNIZAÇÃO",
    "CONTABILIDADE",
    "DISTRIBUIÇÃO DE LUCROS",
    "DOAÇÃO",
    "EMPRÉSTIMOS",
    "ENERGIA",
    "ESTACIONAMENTO",
    "FÉRIAS",
    "FRETE",
    "FUNCIONÁRIOS",
    "GRATIFICAÇÃO",
    "HOSPEDAGEM",
    "IMPOSTO - CARRO",
    "IMPOSTOS",
    "IMPOSTOS - FGTS",
    "IMPOSTOS - ISS",
    "IMPRESSORAS",
    "INTERNET",
    "INSUMOS",
    "LAVA-RÁPIDO",
    "MANUTENÇÃO DE VEÍCULOS",
    "MANUTENÇÃO",
    "MATERIAL DE ESCRITÓRIO",
    "MATERIAL DE LIMPEZA",
    "OUTROS",
    "PEDÁGIO",
    "PEÇAS",
    "PRÓ-LABORE",
    "REFEIÇÃO",
    "SEGURO",
    "SERVIÇOS TERCEIRIZADOS",
    "SISTEMA",
    "TÁXI/UBER",
    "TECNOLOGIA",
    "TELEFONE",
    "TRANSPORTE",
)

BANCOS: Tuple[str, ...] = (
    "ALELO",
    "BANCO DO BRASIL",
    "SICREED",
)

FORMAS_PAGAMENTO: Tuple[str, ...] = (
    "Cartão de Crédito",
    "Débito automático",
    "Transferência Bancária",
    "PIX",
    "Boleto",
)

# Keys are looked up after normalization, so accented and unaccented
# spellings collapse to the same entry.
CONTRACT_ALIASES: Mapping[str, str] = MappingProxyType({
    "secretaria de administração": "SECRETARIA DA ADMINISTRAÇÃO",
    "secretaria administração": "SECRETARIA DA ADMINISTRAÇÃO",
    "administração": "SECRETARIA DA ADMINISTRAÇÃO",
    "secretaria de economia": "SECRETARIA DA ECONOMIA",
    "secretaria economia": "SECRETARIA DA ECONOMIA",
    "economia": "SECRETARIA DA ECONOMIA",
    "secretaria de saúde": "SECRETARIA DA SAÚDE",
    "secretaria saúde": "SECRETARIA DA SAÚDE",
    "secretaria da saúde": "SECRETARIA DA SAÚDE",
    "saúde": "SECRETARIA DA SAÚDE",
})

BANK_ALIASES: Mapping[str, str] = MappingProxyType({
    "bb": "BANCO DO BRASIL",
    "brasil": "BANCO DO BRASIL",
    "sicredi": "SICREED",
    "sicred": "SICREED",
    "ticket": "ALELO",
    "vale": "ALELO",
})

PAYMENT_METHOD_ALIASES: Mapping[str, str] = MappingProxyType({
    "cartão": "Cartão de Crédito",
    "card": "Cartão de Crédito",
    "crédito": "Cartão de Crédito",
    "débito": "Débito automático",
    "transferência": "Transferência Bancária",
    "bancário": "Transferência Bancária",
    "ted": "Transferência Bancária",
    "cheque": "Transferência Bancária",
})

DEFAULT_CATEGORY = "OUTROS"
HIGH_VALUE_THRESHOLD = Decimal("50000")


@dataclass(frozen=True)
class ImportConfig:
    """Everything the import pipeline matches against, injected at construction."""

    categories: Tuple[str, ...]
    contracts: Tuple[str, ...]
    payment_methods: Tuple[str, ...]
    banks: Tuple[str, ...]
    contract_aliases: Mapping[str, str] = field(default_factory=dict)
    payment_method_aliases: Mapping[str, str] = field(default_factory=dict)
    bank_aliases: Mapping[str, str] = field(default_factory=dict)
    default_category: Optional[str] = DEFAULT_CATEGORY
    high_value_threshold: Decimal = HIGH_VALUE_THRESHOLD

    @classmethod
    def default(cls, high_value_threshold: Optional[Decimal] = None) -> "ImportConfig":
        return cls(
            categories=CATEGORIAS,
            contracts=CONTRATOS,
            payment_methods=FORMAS_PAGAMENTO,
            banks=BANCOS,
            contract_aliases=CONTRACT_ALIASES,
            payment_method_aliases=PAYMENT_METHOD_ALIASES,
            bank_aliases=BANK_ALIASES,
            high_value_threshold=(
                HIGH_VALUE_THRESHOLD if high_value_threshold is None else high_value_threshold
            ),
        )
