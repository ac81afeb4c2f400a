"""
Resumo financeiro (painel) e sincronização custos -> contas a pagar
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, or_, select

from locadora.categorias import (
    CATEGORIAS_CONTA_PAGAR,
    ORIGEM_CONTA_CUSTO,
    STATUS_PAGO,
    STATUS_PENDENTE,
)
from locadora.models import db, ContaPagar, Custo, DespesaRecorrente, Salario
from locadora.services.datas import primeiro_dia_mes

logger = logging.getLogger(__name__)

DIAS_PROXIMOS = 7


def _soma(contas) -> float:
    return float(sum((c.valor or Decimal('0')) for c in contas))


def resumo_financeiro(hoje: date | None = None) -> dict:
    hoje = hoje or date.today()
    limite = hoje + timedelta(days=DIAS_PROXIMOS)

    contas = ContaPagar.query.all()
    pagas = [c for c in contas if c.status == STATUS_PAGO]
    abertas = [c for c in contas if c.status != STATUS_PAGO]
    atrasadas = [c for c in abertas if c.data_vencimento < hoje]
    proximas = [c for c in abertas if hoje <= c.data_vencimento <= limite]

    total_salarios = db.session.query(func.coalesce(func.sum(Salario.valor), 0)).filter(
        Salario.mes_referencia == primeiro_dia_mes(hoje)
    ).scalar()
    total_recorrente = db.session.query(func.coalesce(func.sum(DespesaRecorrente.valor), 0)).filter(
        DespesaRecorrente.ativo.is_(True)
    ).scalar()

    return {
        'total_pendente': _soma(abertas),
        'total_pago': _soma(pagas),
        'total_atrasado': _soma(atrasadas),
        'qtd_atrasadas': len(atrasadas),
        'proximos_pagamentos': _soma(proximas),
        'qtd_proximos': len(proximas),
        'total_salarios': float(total_salarios or 0),
        'total_recorrente': float(total_recorrente or 0),
    }


def _categoria_conta(categoria: str) -> str:
    return categoria if categoria in CATEGORIAS_CONTA_PAGAR else 'Despesas'


def sincronizar_custos_contas_pagar() -> int:
    """
    Cria uma conta a pagar para cada custo avulso em aberto que ainda
    não tem conta. Custos "valor a definir" ficam de fora até serem
    estimados.

    Returns:
        int: Quantidade de contas criadas
    """
    ja_espelhados = select(ContaPagar.referencia_origem_id).where(ContaPagar.referencia_origem_id.isnot(None))
    pagos_por_conta = select(ContaPagar.custo_id).where(ContaPagar.custo_id.isnot(None))

    custos = Custo.query.filter(
        or_(Custo.recorrente.is_(None), Custo.recorrente.is_(False)),
        Custo.status != STATUS_PAGO,
        ~((Custo.valor == 0) & (Custo.status == STATUS_PENDENTE)),
        Custo.id.notin_(ja_espelhados),
        Custo.id.notin_(pagos_por_conta),
    ).order_by(Custo.data_custo.asc(), Custo.id.asc()).all()

    for custo in custos:
        db.session.add(ContaPagar(
            descricao=custo.descricao,
            valor=custo.valor,
            data_vencimento=custo.data_custo,
            categoria=_categoria_conta(custo.categoria),
            status=custo.status,
            documento_ref=custo.documento_ref,
            origem_tipo=ORIGEM_CONTA_CUSTO,
            referencia_origem_id=custo.id
        ))

    db.session.flush()
    if custos:
        logger.info('Sincronização: %d custo(s) enviados para contas a pagar', len(custos))
    return len(custos)
