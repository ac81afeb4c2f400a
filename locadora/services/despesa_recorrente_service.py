from __future__ import annotations

import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from locadora.categorias import (
    CATEGORIAS_CONTA_PAGAR,
    ORIGEM_CONTA_RECORRENTE,
    STATUS_PENDENTE,
)
from locadora.models import db, ContaPagar, DespesaRecorrente
from locadora.services.datas import dia_no_mes, parse_mes, primeiro_dia_mes, proxima_data_ciclo, to_decimal

logger = logging.getLogger(__name__)


def _validar_dia(dia) -> int:
    try:
        dia = int(dia)
    except (TypeError, ValueError):
        raise ValueError('dia_vencimento deve ser um número entre 1 e 31')
    if not 1 <= dia <= 31:
        raise ValueError('dia_vencimento deve ser um número entre 1 e 31')
    return dia


def _validar_categoria(categoria) -> str:
    if categoria not in CATEGORIAS_CONTA_PAGAR:
        raise ValueError(f'Categoria inválida. Use uma das seguintes: {", ".join(CATEGORIAS_CONTA_PAGAR)}')
    return categoria


def obter(despesa_id: int) -> DespesaRecorrente:
    despesa = db.session.get(DespesaRecorrente, despesa_id)
    if not despesa:
        raise ValueError('Despesa recorrente não encontrada')
    return despesa


def listar(ativo: bool | None = None) -> list[DespesaRecorrente]:
    query = DespesaRecorrente.query
    if ativo is not None:
        query = query.filter(DespesaRecorrente.ativo.is_(bool(ativo)))
    return query.order_by(DespesaRecorrente.dia_vencimento.asc(), DespesaRecorrente.id.asc()).all()


def criar(dados: dict) -> DespesaRecorrente:
    if not dados.get('descricao'):
        raise ValueError('Descrição é obrigatória')

    valor = to_decimal(dados.get('valor'))
    if valor is None or valor <= 0:
        raise ValueError('Valor deve ser maior que zero')

    despesa = DespesaRecorrente(
        descricao=dados['descricao'].strip(),
        valor=valor,
        dia_vencimento=_validar_dia(dados.get('dia_vencimento')),
        categoria=_validar_categoria(dados.get('categoria')),
        ativo=True,
        forma_pagamento=dados.get('forma_pagamento'),
        observacoes=dados.get('observacoes'),
        funcionario_id=dados.get('funcionario_id') or None
    )
    db.session.add(despesa)
    db.session.flush()
    return despesa


def atualizar(despesa_id: int, dados: dict) -> DespesaRecorrente:
    """
    Atualiza o modelo. Contas já geradas não são alteradas; as próximas
    gerações usam os novos valores.
    """
    despesa = obter(despesa_id)

    if 'descricao' in dados:
        if not dados['descricao']:
            raise ValueError('Descrição é obrigatória')
        despesa.descricao = dados['descricao'].strip()
    if 'valor' in dados:
        valor = to_decimal(dados['valor'])
        if valor is None or valor <= 0:
            raise ValueError('Valor deve ser maior que zero')
        despesa.valor = valor
    if 'dia_vencimento' in dados:
        despesa.dia_vencimento = _validar_dia(dados['dia_vencimento'])
    if 'categoria' in dados:
        despesa.categoria = _validar_categoria(dados['categoria'])
    for campo in ('forma_pagamento', 'observacoes'):
        if campo in dados:
            setattr(despesa, campo, dados[campo])
    if 'ativo' in dados:
        despesa.ativo = bool(dados['ativo'])

    db.session.add(despesa)
    return despesa


def ativar(despesa_id: int) -> DespesaRecorrente:
    despesa = obter(despesa_id)
    despesa.ativo = True
    db.session.add(despesa)
    return despesa


def desativar(despesa_id: int) -> DespesaRecorrente:
    """Contas já geradas continuam valendo."""
    despesa = obter(despesa_id)
    despesa.ativo = False
    db.session.add(despesa)
    return despesa


def excluir(despesa_id: int) -> None:
    despesa = obter(despesa_id)
    # Contas geradas permanecem, apenas perdem o vínculo
    ContaPagar.query.filter_by(despesa_recorrente_id=despesa.id).update(
        {ContaPagar.despesa_recorrente_id: None}, synchronize_session=False
    )
    db.session.delete(despesa)


def _conta_do_ciclo(despesa: DespesaRecorrente, inicio: date, fim: date) -> ContaPagar | None:
    return ContaPagar.query.filter(
        ContaPagar.despesa_recorrente_id == despesa.id,
        ContaPagar.data_vencimento >= inicio,
        ContaPagar.data_vencimento <= fim,
    ).first()


def _nova_conta(despesa: DespesaRecorrente, vencimento: date) -> ContaPagar:
    conta = ContaPagar(
        descricao=despesa.descricao,
        valor=despesa.valor,
        data_vencimento=vencimento,
        categoria=despesa.categoria,
        status=STATUS_PENDENTE,
        documento_ref=f'Recorrente - {despesa.descricao}',
        forma_pagamento=despesa.forma_pagamento,
        origem_tipo=ORIGEM_CONTA_RECORRENTE,
        despesa_recorrente_id=despesa.id
    )
    db.session.add(conta)
    if despesa.ultima_geracao is None or vencimento > despesa.ultima_geracao:
        despesa.ultima_geracao = vencimento
        db.session.add(despesa)
    return conta


def gerar_para_mes(mes) -> int:
    """
    Garante uma conta a pagar pendente por despesa recorrente ativa no mês.

    Idempotente: despesas que já têm conta no mês são ignoradas.

    Args:
        mes: date ou 'YYYY-MM' / 'YYYY-MM-DD' (qualquer dia do mês)

    Returns:
        int: Quantidade de contas criadas nesta chamada
    """
    inicio = parse_mes(mes)
    if not inicio:
        raise ValueError('Mês inválido (use YYYY-MM)')
    fim = inicio + relativedelta(months=1, days=-1)

    criadas = []
    for despesa in listar(ativo=True):
        if _conta_do_ciclo(despesa, inicio, fim):
            continue
        criadas.append(_nova_conta(despesa, dia_no_mes(inicio, despesa.dia_vencimento)))

    db.session.flush()
    logger.info('Despesas recorrentes de %s: %d conta(s) gerada(s)', inicio.strftime('%m/%Y'), len(criadas))
    return len(criadas)


def localizar_modelo(conta: ContaPagar) -> DespesaRecorrente | None:
    """
    Encontra a despesa recorrente que originou a conta.

    Usa o vínculo explícito quando existe; contas sem vínculo (lançadas à
    mão ou anteriores ao vínculo) caem na comparação exata de descrição,
    valor e categoria entre as despesas ativas.
    """
    if conta.despesa_recorrente_id:
        return db.session.get(DespesaRecorrente, conta.despesa_recorrente_id)

    candidatas = DespesaRecorrente.query.filter(
        DespesaRecorrente.descricao == conta.descricao,
        DespesaRecorrente.valor == conta.valor,
        DespesaRecorrente.categoria == conta.categoria,
        DespesaRecorrente.ativo.is_(True),
    ).all()
    if len(candidatas) != 1:
        return None
    return candidatas[0]


def gerar_proximo_ciclo(conta_paga: ContaPagar) -> ContaPagar | None:
    """
    Cria a conta do próximo mês para uma conta de despesa recorrente paga.

    Sem modelo encontrado (ou modelo inativo) apenas registra um aviso e
    retorna None: o pagamento em curso não é afetado.
    """
    despesa = localizar_modelo(conta_paga)
    if despesa is None:
        logger.warning('Despesa recorrente não encontrada para: %s (conta %s)',
                       conta_paga.descricao, conta_paga.id)
        return None
    if not despesa.ativo:
        logger.warning('Despesa recorrente %s inativa; próximo ciclo não gerado', despesa.id)
        return None

    vencimento = proxima_data_ciclo(
        conta_paga.data_vencimento,
        despesa.dia_vencimento,
        nao_antes_de=conta_paga.data_vencimento + relativedelta(days=1)
    )

    inicio = primeiro_dia_mes(vencimento)
    existente = _conta_do_ciclo(despesa, inicio, inicio + relativedelta(months=1, days=-1))
    if existente:
        return existente

    conta = _nova_conta(despesa, vencimento)
    db.session.flush()
    logger.info('Nova conta recorrente criada: %s (venc. %s)', conta.id, vencimento.isoformat())
    return conta
