from datetime import date
from decimal import Decimal

import pytest

from locadora.models import db, ContaPagar, Custo, Funcionario, Salario
from locadora.services import conta_pagar_service
from locadora.services.salario_service import SalarioService


def _salario(funcionario, **campos):
    dados = {'funcionario_id': funcionario.id, 'valor': '5200.00', 'data_pagamento': '2025-03-05'}
    dados.update(campos)
    salario = SalarioService.criar_salario(dados)
    db.session.commit()
    return salario


def test_criar_salario_gera_custo_e_conta(funcionario):
    salario = _salario(funcionario)

    assert salario.mes_referencia == date(2025, 3, 1)
    custo = db.session.get(Custo, salario.custo_id)
    conta = db.session.get(ContaPagar, salario.conta_pagar_id)

    assert custo.categoria == 'Despesas'
    assert custo.origem == 'Usuario'
    assert custo.recorrente is True
    assert custo.dia_recorrencia == 5
    assert custo.descricao == 'Salário - Ana Souza - 03/2025'
    assert custo.referencia_origem_tipo == 'salario'
    assert custo.referencia_origem_id == salario.id

    assert conta.categoria == 'Salário'
    assert conta.origem_tipo == 'Salário'
    assert conta.referencia_origem_id == custo.id
    assert conta.salario_id == salario.id
    assert conta.status == 'Pendente'


def test_pagar_conta_de_salario_nao_duplica_custo(funcionario):
    salario = _salario(funcionario)

    conta, custo, proxima = conta_pagar_service.marcar_como_paga(salario.conta_pagar_id)
    db.session.commit()

    assert custo.id == salario.custo_id
    assert custo.status == 'Pago'
    assert conta.custo_id == salario.custo_id
    assert proxima is None
    assert Custo.query.count() == 1


def test_atualizar_status_replica_no_custo_e_conta(funcionario):
    salario = _salario(funcionario)

    SalarioService.atualizar_salario(salario.id, {'status': 'Pago'})
    db.session.commit()

    assert db.session.get(Custo, salario.custo_id).status == 'Pago'
    conta = db.session.get(ContaPagar, salario.conta_pagar_id)
    assert conta.status == 'Pago'
    assert conta.data_pagamento is not None
    assert conta.custo_id == salario.custo_id


def test_atualizar_sem_vinculos_apenas_avisa(funcionario, caplog):
    salario = _salario(funcionario)
    salario.custo_id = None
    salario.conta_pagar_id = None
    db.session.commit()

    SalarioService.atualizar_salario(salario.id, {'status': 'Autorizado'})
    db.session.commit()

    assert db.session.get(Salario, salario.id).status == 'Autorizado'
    assert 'sem custo vinculado' in caplog.text


@pytest.mark.parametrize('campos', [
    {'funcionario_id': 999},
    {'valor': '0'},
    {'data_pagamento': 'ontem'},
    {'status': 'Cancelado'},
])
def test_criar_salario_invalido(funcionario, campos):
    with pytest.raises(ValueError):
        _salario(funcionario, **campos)


def test_excluir_salario_mantem_historico(funcionario):
    salario = _salario(funcionario)
    conta_id = salario.conta_pagar_id

    SalarioService.excluir_salario(salario.id)
    db.session.commit()

    assert Salario.query.count() == 0
    assert db.session.get(ContaPagar, conta_id).salario_id is None
    assert Custo.query.count() == 1


def test_gerar_salarios_mes_idempotente(funcionario):
    db.session.add_all([
        Funcionario(nome='Carlos Lima', cargo='Pátio', codigo='F002', salario_base=Decimal('2400.00'),
                    dia_pagamento=31, ativo=True),
        Funcionario(nome='Sem Salário', cargo='Estagiário', codigo='F003', ativo=True),
        Funcionario(nome='Desligado', cargo='Pátio', codigo='F004', salario_base=Decimal('2000.00'), ativo=False),
    ])
    db.session.commit()

    assert SalarioService.gerar_salarios_mes('2025-04') == 2
    db.session.commit()
    assert SalarioService.gerar_salarios_mes('2025-04') == 0

    salarios = {s.funcionario.nome: s for s in SalarioService.listar_salarios(mes='2025-04')}
    assert set(salarios) == {'Ana Souza', 'Carlos Lima'}
    assert salarios['Carlos Lima'].data_pagamento == date(2025, 4, 30)
    assert salarios['Ana Souza'].data_pagamento == date(2025, 4, 5)
    assert ContaPagar.query.filter_by(categoria='Salário').count() == 2
