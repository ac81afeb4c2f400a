"""
Registros de abastecimento
"""
from datetime import date

from locadora.models import db, Abastecimento, Contrato, Veiculo
from locadora.services.datas import parse_date, to_decimal


def listar_abastecimentos(veiculo_id=None):
    query = Abastecimento.query
    if veiculo_id:
        query = query.filter(Abastecimento.veiculo_id == veiculo_id)
    return query.order_by(Abastecimento.data_abastecimento.desc(), Abastecimento.id.desc()).all()


def criar_abastecimento(dados):
    """
    Registra um abastecimento. Sem custo_combustivel o registro fica fora
    do livro de custos até receber uma estimativa.
    """
    veiculo_id = dados.get('veiculo_id')
    veiculo = db.session.get(Veiculo, int(veiculo_id)) if veiculo_id else None
    if not veiculo:
        raise ValueError('Veículo não encontrado')

    litros = to_decimal(dados.get('litros'))
    if litros is None or litros <= 0:
        raise ValueError('Quantidade de litros deve ser maior que zero')

    custo = None
    if dados.get('custo_combustivel') not in (None, ''):
        custo = to_decimal(dados['custo_combustivel'])
        if custo is None or custo < 0:
            raise ValueError('Custo do combustível inválido')

    quilometragem = dados.get('quilometragem')
    if quilometragem not in (None, ''):
        try:
            quilometragem = int(quilometragem)
        except (TypeError, ValueError):
            raise ValueError('Quilometragem inválida')
        if quilometragem < 0:
            raise ValueError('Quilometragem inválida')
    else:
        quilometragem = None

    contrato_id = dados.get('contrato_id')
    if contrato_id and not db.session.get(Contrato, int(contrato_id)):
        raise ValueError('Contrato não encontrado')

    abastecimento = Abastecimento(
        veiculo_id=veiculo.id,
        contrato_id=int(contrato_id) if contrato_id else None,
        tipo_combustivel=dados.get('tipo_combustivel') or 'Gasolina',
        litros=litros,
        custo_combustivel=custo,
        data_abastecimento=parse_date(dados.get('data_abastecimento')) or date.today(),
        quilometragem=quilometragem,
        pago=bool(dados.get('pago', False)),
        observacoes=dados.get('observacoes')
    )
    db.session.add(abastecimento)
    db.session.flush()
    return abastecimento
