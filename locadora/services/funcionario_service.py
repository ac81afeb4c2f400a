"""
Cadastro de funcionários (base da folha de salários)
"""
from locadora.models import db, Funcionario
from locadora.services.datas import to_decimal

CAMPOS_FUNCIONARIO = ('nome', 'cargo', 'codigo', 'email', 'ativo')


def obter_funcionario(funcionario_id):
    funcionario = db.session.get(Funcionario, funcionario_id)
    if not funcionario:
        raise ValueError('Funcionário não encontrado')
    return funcionario


def listar_funcionarios(ativo=None):
    query = Funcionario.query
    if ativo is not None:
        query = query.filter(Funcionario.ativo.is_(bool(ativo)))
    return query.order_by(Funcionario.nome).all()


def _validar_codigo(codigo, funcionario_id=None):
    if not codigo:
        return None
    existente = Funcionario.query.filter_by(codigo=codigo).first()
    if existente and existente.id != funcionario_id:
        raise ValueError('Já existe um funcionário com este código')
    return codigo


def _aplicar_remuneracao(funcionario, dados):
    if 'salario_base' in dados:
        salario = to_decimal(dados['salario_base'])
        if salario is None or salario < 0:
            raise ValueError('Salário base inválido')
        funcionario.salario_base = salario

    if 'dia_pagamento' in dados:
        try:
            dia = int(dados['dia_pagamento'])
        except (TypeError, ValueError):
            raise ValueError('Dia de pagamento deve estar entre 1 e 31')
        if not 1 <= dia <= 31:
            raise ValueError('Dia de pagamento deve estar entre 1 e 31')
        funcionario.dia_pagamento = dia


def criar_funcionario(dados):
    nome = (dados.get('nome') or '').strip()
    if not nome:
        raise ValueError('Nome é obrigatório')

    funcionario = Funcionario(**{campo: dados[campo] for campo in CAMPOS_FUNCIONARIO if campo in dados})
    funcionario.nome = nome
    funcionario.codigo = _validar_codigo(dados.get('codigo'))
    _aplicar_remuneracao(funcionario, dados)
    db.session.add(funcionario)
    db.session.flush()
    return funcionario


def atualizar_funcionario(funcionario_id, dados):
    funcionario = obter_funcionario(funcionario_id)
    if 'nome' in dados and not (dados['nome'] or '').strip():
        raise ValueError('Nome é obrigatório')
    if 'codigo' in dados:
        _validar_codigo(dados['codigo'], funcionario.id)

    for campo in CAMPOS_FUNCIONARIO:
        if campo in dados:
            setattr(funcionario, campo, dados[campo])
    funcionario.nome = funcionario.nome.strip()
    if not funcionario.codigo:
        funcionario.codigo = None
    _aplicar_remuneracao(funcionario, dados)
    db.session.add(funcionario)
    return funcionario


def desativar_funcionario(funcionario_id):
    """Desliga o funcionário; salários já lançados são mantidos."""
    funcionario = obter_funcionario(funcionario_id)
    funcionario.ativo = False
    db.session.add(funcionario)
    return funcionario
