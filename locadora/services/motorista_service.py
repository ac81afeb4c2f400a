"""
Motoristas e atribuição de veículos
"""
import logging
from datetime import datetime

from locadora.models import db, Motorista, MotoristaVeiculo, Multa, Veiculo

logger = logging.getLogger(__name__)

CAMPOS_MOTORISTA = ('nome', 'cpf', 'cnh', 'telefone', 'ativo')


def obter_motorista(motorista_id):
    motorista = db.session.get(Motorista, motorista_id)
    if not motorista:
        raise ValueError('Motorista não encontrado')
    return motorista


def listar_motoristas(ativo=None):
    query = Motorista.query
    if ativo is not None:
        query = query.filter(Motorista.ativo.is_(bool(ativo)))
    return query.order_by(Motorista.nome).all()


def criar_motorista(dados):
    if not dados.get('nome'):
        raise ValueError('Nome é obrigatório')
    if dados.get('cpf') and Motorista.query.filter_by(cpf=dados['cpf']).first():
        raise ValueError('Já existe um motorista com este CPF')

    motorista = Motorista(**{campo: dados[campo] for campo in CAMPOS_MOTORISTA if campo in dados})
    motorista.nome = dados['nome'].strip()
    db.session.add(motorista)
    db.session.flush()
    return motorista


def atualizar_motorista(motorista_id, dados):
    motorista = obter_motorista(motorista_id)
    if 'nome' in dados and not dados['nome']:
        raise ValueError('Nome é obrigatório')
    for campo in CAMPOS_MOTORISTA:
        if campo in dados:
            setattr(motorista, campo, dados[campo])
    db.session.add(motorista)
    return motorista


def excluir_motorista(motorista_id):
    """
    Exclui o motorista. Multas associadas são mantidas sem motorista.
    """
    motorista = obter_motorista(motorista_id)
    desvinculadas = Multa.query.filter_by(motorista_id=motorista.id).update(
        {Multa.motorista_id: None}, synchronize_session=False
    )
    if desvinculadas:
        logger.info('Motorista %s: %d multa(s) desvinculada(s)', motorista.id, desvinculadas)
    db.session.delete(motorista)


def atribuir_veiculo(motorista_id, veiculo_id, contrato_id=None):
    motorista = obter_motorista(motorista_id)
    veiculo = db.session.get(Veiculo, int(veiculo_id)) if veiculo_id else None
    if not veiculo:
        raise ValueError('Veículo não encontrado')

    existente = MotoristaVeiculo.query.filter_by(
        motorista_id=motorista.id, veiculo_id=veiculo.id, ativo=True
    ).first()
    if existente:
        return existente

    atribuicao = MotoristaVeiculo(
        motorista_id=motorista.id,
        veiculo_id=veiculo.id,
        contrato_id=contrato_id,
        ativo=True,
        atribuido_em=datetime.utcnow()
    )
    db.session.add(atribuicao)
    db.session.flush()
    return atribuicao


def remover_atribuicao(atribuicao_id):
    atribuicao = db.session.get(MotoristaVeiculo, atribuicao_id)
    if not atribuicao:
        raise ValueError('Atribuição não encontrada')
    atribuicao.ativo = False
    atribuicao.removido_em = datetime.utcnow()
    db.session.add(atribuicao)
    return atribuicao


def veiculos_do_motorista(motorista_id):
    motorista = obter_motorista(motorista_id)
    return motorista.atribuicoes.filter_by(ativo=True).order_by(MotoristaVeiculo.atribuido_em.desc()).all()
