from decimal import Decimal

from locadora.models import db, Cliente, Contrato, Custo, Multa


def obter_cliente(cliente_id):
    cliente = db.session.get(Cliente, cliente_id)
    if not cliente:
        raise ValueError('Cliente não encontrado')
    return cliente


def listar_clientes(ativo=None):
    query = Cliente.query
    if ativo is not None:
        query = query.filter(Cliente.ativo.is_(bool(ativo)))
    return query.order_by(Cliente.nome).all()


def criar_cliente(dados):
    if not dados.get('nome'):
        raise ValueError('Nome é obrigatório')
    cliente = Cliente(
        nome=dados['nome'].strip(),
        documento=dados.get('documento'),
        email=dados.get('email'),
        telefone=dados.get('telefone'),
        ativo=dados.get('ativo', True)
    )
    db.session.add(cliente)
    db.session.flush()
    return cliente


def atualizar_cliente(cliente_id, dados):
    cliente = obter_cliente(cliente_id)
    if 'nome' in dados and not dados['nome']:
        raise ValueError('Nome é obrigatório')
    for campo in ('nome', 'documento', 'email', 'telefone', 'ativo'):
        if campo in dados:
            setattr(cliente, campo, dados[campo])
    db.session.add(cliente)
    return cliente


def _com_veiculo(item, registro):
    veiculo = registro.veiculo
    item['veiculo'] = {'placa': veiculo.placa, 'modelo': veiculo.modelo} if veiculo else None
    return item


def historico_cliente(cliente_id):
    """
    Contratos, custos e multas de um cliente com os totais do painel
    """
    cliente = obter_cliente(cliente_id)

    contratos = Contrato.query.filter_by(cliente_id=cliente.id).order_by(Contrato.criado_em.desc()).all()
    custos = Custo.query.filter_by(cliente_id=cliente.id).order_by(Custo.data_custo.desc()).all()
    multas = Multa.query.filter_by(cliente_id=cliente.id).order_by(Multa.data_infracao.desc()).all()

    total_custos = sum((c.valor or Decimal('0')) for c in custos)
    total_multas = sum((m.valor or Decimal('0')) for m in multas)

    return {
        'cliente': cliente.to_dict(),
        'contratos': [c.to_dict() for c in contratos],
        'custos': [c.to_dict() for c in custos],
        'multas': [_com_veiculo(m.to_dict(), m) for m in multas],
        'total_custos': float(total_custos),
        'total_multas': float(total_multas),
        'contratos_ativos': len([c for c in contratos if c.status == 'Ativo']),
        'total_contratos': len(contratos)
    }
