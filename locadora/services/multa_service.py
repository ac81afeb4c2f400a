"""
Registro de multas de trânsito

Multas não viram linhas na tabela custo: aparecem no livro de custos
como custo virtual ('fine_<id>').
"""
import logging

from locadora.models import db, Contrato, Motorista, Multa, Veiculo
from locadora.services.datas import parse_date, to_decimal

logger = logging.getLogger(__name__)

CAMPOS_TEXTO = ('tipo_infracao', 'descricao', 'observacoes')


def obter_multa(multa_id):
    multa = db.session.get(Multa, multa_id)
    if not multa:
        raise ValueError('Multa não encontrada')
    return multa


def listar_multas(veiculo_id=None, pago=None):
    query = Multa.query
    if veiculo_id:
        query = query.filter(Multa.veiculo_id == veiculo_id)
    if pago is not None:
        query = query.filter(Multa.pago.is_(bool(pago)))
    return query.order_by(Multa.data_infracao.desc(), Multa.id.desc()).all()


def _numero(valor, multa_id=None):
    numero = (valor or '').strip() or None
    if numero:
        existente = Multa.query.filter_by(numero=numero).first()
        if existente and existente.id != multa_id:
            raise ValueError('Já existe uma multa com esse número. Verifique o número da multa.')
    return numero


def _valor(valor):
    valor = to_decimal(valor)
    if valor is None or valor <= 0:
        raise ValueError('Valor da multa deve ser maior que zero')
    return valor


def _data(dados, campo, rotulo):
    data = parse_date(dados.get(campo))
    if not data:
        raise ValueError(f'{rotulo} é obrigatória')
    return data


def _vincular(multa, dados):
    if dados.get('motorista_id'):
        if not db.session.get(Motorista, int(dados['motorista_id'])):
            raise ValueError('Motorista não encontrado')
        multa.motorista_id = int(dados['motorista_id'])

    if dados.get('contrato_id'):
        contrato = db.session.get(Contrato, int(dados['contrato_id']))
        if not contrato:
            raise ValueError('Contrato não encontrado')
        multa.contrato_id = contrato.id
        # cliente responsável segue o contrato quando não informado
        multa.cliente_id = dados.get('cliente_id') or contrato.cliente_id


def criar_multa(dados):
    veiculo_id = dados.get('veiculo_id')
    veiculo = db.session.get(Veiculo, int(veiculo_id)) if veiculo_id else None
    if not veiculo:
        raise ValueError('Veículo não encontrado')
    if not (dados.get('tipo_infracao') or '').strip():
        raise ValueError('Tipo de infração é obrigatório')

    multa = Multa(
        veiculo_id=veiculo.id,
        numero=_numero(dados.get('numero')),
        valor=_valor(dados.get('valor')),
        data_infracao=_data(dados, 'data_infracao', 'Data da infração'),
        data_vencimento=_data(dados, 'data_vencimento', 'Data de vencimento'),
        pago=bool(dados.get('pago', False)),
        cliente_id=dados.get('cliente_id')
    )
    for campo in CAMPOS_TEXTO:
        if campo in dados:
            setattr(multa, campo, dados[campo])
    multa.tipo_infracao = multa.tipo_infracao.strip()
    _vincular(multa, dados)

    db.session.add(multa)
    db.session.flush()
    logger.info('Multa %s registrada para o veículo %s', multa.id, veiculo.placa)
    return multa


def atualizar_multa(multa_id, dados):
    multa = obter_multa(multa_id)
    if 'numero' in dados:
        multa.numero = _numero(dados['numero'], multa.id)
    if 'valor' in dados:
        multa.valor = _valor(dados['valor'])
    if 'data_infracao' in dados:
        multa.data_infracao = _data(dados, 'data_infracao', 'Data da infração')
    if 'data_vencimento' in dados:
        multa.data_vencimento = _data(dados, 'data_vencimento', 'Data de vencimento')
    if 'pago' in dados:
        multa.pago = bool(dados['pago'])
    if 'tipo_infracao' in dados and not (dados['tipo_infracao'] or '').strip():
        raise ValueError('Tipo de infração é obrigatório')
    for campo in CAMPOS_TEXTO:
        if campo in dados:
            setattr(multa, campo, dados[campo])
    _vincular(multa, dados)
    db.session.add(multa)
    return multa


def excluir_multa(multa_id):
    db.session.delete(obter_multa(multa_id))
