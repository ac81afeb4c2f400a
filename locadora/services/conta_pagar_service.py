"""
Contas a pagar - ciclo Pendente -> (Autorizado) -> Pago

marcar_como_paga concentra a integração com o livro de custos e com as
despesas recorrentes. Nada aqui faz commit: a rota confirma a transação
inteira uma única vez ou desfaz tudo.
"""
from __future__ import annotations

import logging
from datetime import date

from locadora.categorias import (
    CATEGORIA_DESPESA_RECORRENTE,
    CATEGORIA_SALARIO,
    CATEGORIAS_CONTA_PAGAR,
    ORIGEM_CONTA_MANUAL,
    ORIGEM_FINANCEIRO,
    STATUS_AUTORIZADO,
    STATUS_PAGO,
    STATUS_PENDENTE,
    STATUS_VALIDOS,
    gera_custo_recorrente,
    mapear_categoria_custo,
)
from locadora.models import db, ContaPagar, Custo
from locadora.services import despesa_recorrente_service
from locadora.services.custo_service import CustoService
from locadora.services.datas import parse_date, to_decimal

logger = logging.getLogger(__name__)

TIPO_REFERENCIA_CONTA = 'conta_pagar'


def obter(conta_id: int) -> ContaPagar:
    conta = db.session.get(ContaPagar, conta_id)
    if not conta:
        raise ValueError('Conta a pagar não encontrada')
    return conta


def listar(status=None, categoria=None, origem_tipo=None) -> list[ContaPagar]:
    query = ContaPagar.query
    if status:
        query = query.filter(ContaPagar.status == status)
    if categoria:
        query = query.filter(ContaPagar.categoria == categoria)
    if origem_tipo:
        query = query.filter(ContaPagar.origem_tipo == origem_tipo)
    return query.order_by(ContaPagar.data_vencimento.asc(), ContaPagar.id.asc()).all()


def criar_avulsa(dados: dict) -> ContaPagar:
    """
    Lança uma conta manual. O custo correspondente só nasce no pagamento.
    """
    if not dados.get('descricao'):
        raise ValueError('Descrição é obrigatória')

    valor = to_decimal(dados.get('valor'))
    if valor is None or valor <= 0:
        raise ValueError('Valor deve ser maior que zero')

    vencimento = parse_date(dados.get('data_vencimento'))
    if not vencimento:
        raise ValueError('data_vencimento inválida (use YYYY-MM-DD)')

    categoria = dados.get('categoria') or 'Avulsa'
    if categoria not in CATEGORIAS_CONTA_PAGAR:
        raise ValueError(f'Categoria inválida. Use uma das seguintes: {", ".join(CATEGORIAS_CONTA_PAGAR)}')

    status = dados.get('status') or STATUS_PENDENTE
    if status not in (STATUS_PENDENTE, STATUS_AUTORIZADO):
        raise ValueError('Conta nova deve estar Pendente ou Autorizada')

    conta = ContaPagar(
        descricao=dados['descricao'].strip(),
        valor=valor,
        data_vencimento=vencimento,
        categoria=categoria,
        status=status,
        fornecedor=dados.get('fornecedor'),
        documento_ref=dados.get('documento_ref'),
        forma_pagamento=dados.get('forma_pagamento'),
        origem_tipo=ORIGEM_CONTA_MANUAL
    )
    db.session.add(conta)
    db.session.flush()
    return conta


def autorizar(conta_id: int) -> ContaPagar:
    conta = obter(conta_id)
    if conta.status != STATUS_PENDENTE:
        raise ValueError(f'Somente contas pendentes podem ser autorizadas (status atual: {conta.status})')
    conta.status = STATUS_AUTORIZADO
    db.session.add(conta)
    return conta


def excluir(conta_id: int) -> None:
    conta = obter(conta_id)
    if conta.status == STATUS_PAGO:
        raise ValueError('Conta paga não pode ser excluída')
    db.session.delete(conta)


def _custo_do_pagamento(conta: ContaPagar) -> Custo | None:
    return Custo.query.filter_by(
        referencia_origem_tipo=TIPO_REFERENCIA_CONTA,
        referencia_origem_id=conta.id
    ).first()


def _descricao_custo(conta: ContaPagar) -> str:
    if conta.categoria == CATEGORIA_SALARIO:
        return f'Salário Pago: {conta.descricao}'
    if gera_custo_recorrente(conta.categoria):
        return f'Despesa Recorrente: {conta.descricao}'
    return f'Conta Paga: {conta.descricao}'


def _criar_custo_pagamento(conta: ContaPagar) -> Custo:
    dados = {
        'categoria': mapear_categoria_custo(conta.categoria),
        'descricao': _descricao_custo(conta),
        'valor': conta.valor,
        'data_custo': conta.data_vencimento,
        'status': STATUS_PAGO,
        'origem': ORIGEM_FINANCEIRO,
        'criado_por_nome': 'Sistema',
        'departamento': 'Financeiro',
        'referencia_origem_id': conta.id,
        'referencia_origem_tipo': TIPO_REFERENCIA_CONTA,
    }

    if gera_custo_recorrente(conta.categoria):
        dados.update({
            'tipo_recorrencia': 'monthly',
            'dia_recorrencia': conta.data_vencimento.day,
            'observacoes': f'Pagamento de conta a pagar recorrente - {conta.categoria}',
        })
        return CustoService.criar_custo_recorrente(dados)

    dados.update({
        'documento_ref': conta.documento_ref or f'Conta Paga - {conta.categoria}',
        'observacoes': (
            f'Conta a pagar marcada como paga via Financeiro | '
            f'Método de pagamento: {conta.forma_pagamento or "Não informado"} | '
            f'Vencimento: {conta.data_vencimento.isoformat()}'
        ),
    })
    return CustoService.criar_custo(dados)


def marcar_como_paga(conta_id: int, data_pagamento=None):
    """
    Registra o pagamento de uma conta

    1. Conta já paga com custo vinculado, ou custo de pagamento já existente:
       apenas (re)vincula e encerra (pagar duas vezes não duplica custo).
    2. Conta espelhando um custo (referencia_origem_id): o custo passa a Pago.
    3. Caso contrário cria o custo do pagamento (recorrente para Salário,
       Despesa Recorrente, Seguro e Despesas; avulso para as demais).
    4. Despesa Recorrente: gera a conta do próximo ciclo.

    Args:
        conta_id (int): ID da conta a pagar
        data_pagamento (date|str, opcional): padrão hoje

    Returns:
        tuple: (conta, custo, proxima_conta) - proxima_conta pode ser None

    Raises:
        ValueError: Conta inexistente ou data inválida
    """
    conta = obter(conta_id)

    existente = _custo_do_pagamento(conta)
    if existente or (conta.status == STATUS_PAGO and conta.custo_id):
        custo = existente or conta.custo
        if custo is not None and conta.custo_id != custo.id:
            conta.custo_id = custo.id
            db.session.add(conta)
        logger.info('Conta %s já possui custo de pagamento; apenas vinculada', conta.id)
        return conta, custo, None

    pago_em = parse_date(data_pagamento) if data_pagamento else date.today()
    if not pago_em:
        raise ValueError('data_pagamento inválida (use YYYY-MM-DD)')

    conta.status = STATUS_PAGO
    conta.data_pagamento = pago_em

    custo = None
    if conta.referencia_origem_id:
        custo = db.session.get(Custo, conta.referencia_origem_id)
        if custo is None:
            logger.warning('Custo de origem %s da conta %s não existe; criando custo de pagamento',
                           conta.referencia_origem_id, conta.id)
        else:
            custo.status = STATUS_PAGO
            db.session.add(custo)

    if custo is None:
        custo = _criar_custo_pagamento(conta)

    conta.custo_id = custo.id
    db.session.add(conta)
    db.session.flush()

    proxima = None
    if conta.categoria == CATEGORIA_DESPESA_RECORRENTE:
        proxima = despesa_recorrente_service.gerar_proximo_ciclo(conta)

    logger.info('Conta %s paga em %s (custo %s)', conta.id, pago_em.isoformat(), custo.id)
    return conta, custo, proxima


def alterar_status(conta_id: int, status: str) -> ContaPagar:
    """Transição genérica usada pelo formulário; Pago passa por marcar_como_paga."""
    if status not in STATUS_VALIDOS:
        raise ValueError('Status inválido')
    if status == STATUS_PAGO:
        conta, _, _ = marcar_como_paga(conta_id)
        return conta
    if status == STATUS_AUTORIZADO:
        return autorizar(conta_id)

    conta = obter(conta_id)
    if conta.status == STATUS_PAGO:
        raise ValueError('Conta paga não pode voltar a pendente')
    conta.status = STATUS_PENDENTE
    db.session.add(conta)
    return conta
