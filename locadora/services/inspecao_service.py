"""
Danos registrados em inspeção de veículos

Todo dano registrado entra na fila de notificação por e-mail.
"""
import logging

from locadora.models import db, Contrato, DanoInspecao, Veiculo
from locadora.services import notificacao_service
from locadora.services.datas import to_decimal

logger = logging.getLogger(__name__)

TIPOS_DANO = ('Arranhão', 'Amassado', 'Quebrado', 'Desgaste', 'Outro')
SEVERIDADES = ('Baixa', 'Média', 'Alta')


def listar_danos(veiculo_id, reparado=None):
    veiculo = db.session.get(Veiculo, veiculo_id)
    if not veiculo:
        raise ValueError('Veículo não encontrado')
    query = DanoInspecao.query.filter_by(veiculo_id=veiculo.id)
    if reparado is not None:
        query = query.filter(DanoInspecao.reparado.is_(bool(reparado)))
    return query.order_by(DanoInspecao.criado_em.desc()).all()


def registrar_dano(veiculo_id, dados):
    """
    Cria o dano e enfileira a notificação.

    Returns:
        (DanoInspecao, NotificacaoDano)
    """
    veiculo = db.session.get(Veiculo, veiculo_id)
    if not veiculo:
        raise ValueError('Veículo não encontrado')

    local = (dados.get('local') or '').strip()
    descricao = (dados.get('descricao') or '').strip()
    if not local:
        raise ValueError('Localização é obrigatória')
    if not descricao:
        raise ValueError('Descrição é obrigatória')
    if dados.get('tipo_dano') not in TIPOS_DANO:
        raise ValueError('Tipo de dano é obrigatório e deve ser válido')
    severidade = dados.get('severidade') or 'Baixa'
    if severidade not in SEVERIDADES:
        raise ValueError(f'Severidade inválida: {severidade}')

    custo_estimado = to_decimal(dados.get('custo_estimado'))
    if custo_estimado is not None and custo_estimado < 0:
        raise ValueError('Custo estimado inválido')

    contrato_id = dados.get('contrato_id')
    if contrato_id and not db.session.get(Contrato, int(contrato_id)):
        raise ValueError('Contrato não encontrado')

    dano = DanoInspecao(
        veiculo=veiculo,
        contrato_id=int(contrato_id) if contrato_id else None,
        local=local,
        tipo_dano=dados['tipo_dano'],
        severidade=severidade,
        descricao=descricao,
        custo_estimado=custo_estimado or 0,
        requer_reparo=bool(dados.get('requer_reparo', True)),
        observacoes=dados.get('observacoes')
    )
    db.session.add(dano)
    db.session.flush()

    notificacao = notificacao_service.enfileirar_dano(dano)
    logger.info('Dano %s registrado no veículo %s; notificação %s pendente',
                dano.id, veiculo.placa, notificacao.id)
    return dano, notificacao
