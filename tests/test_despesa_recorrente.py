from datetime import date

import pytest

from locadora.models import db, ContaPagar, DespesaRecorrente
from locadora.services import despesa_recorrente_service


@pytest.fixture
def despesas(app):
    criadas = [
        despesa_recorrente_service.criar({'descricao': 'Internet', 'valor': 150, 'dia_vencimento': 10,
                                          'categoria': 'Despesa Recorrente'}),
        despesa_recorrente_service.criar({'descricao': 'Aluguel', 'valor': 3500, 'dia_vencimento': 31,
                                          'categoria': 'Despesa Recorrente'}),
        despesa_recorrente_service.criar({'descricao': 'Seguro', 'valor': 900, 'dia_vencimento': 5,
                                          'categoria': 'Seguro'}),
    ]
    db.session.commit()
    return criadas


@pytest.mark.parametrize('dados, mensagem', [
    ({'valor': 10, 'dia_vencimento': 1, 'categoria': 'Seguro'}, 'Descrição'),
    ({'descricao': 'X', 'valor': 0, 'dia_vencimento': 1, 'categoria': 'Seguro'}, 'Valor'),
    ({'descricao': 'X', 'valor': 10, 'dia_vencimento': 32, 'categoria': 'Seguro'}, 'dia_vencimento'),
    ({'descricao': 'X', 'valor': 10, 'dia_vencimento': 'dez', 'categoria': 'Seguro'}, 'dia_vencimento'),
    ({'descricao': 'X', 'valor': 10, 'dia_vencimento': 1, 'categoria': 'Lazer'}, 'Categoria'),
])
def test_criar_valida_dados(app, dados, mensagem):
    with pytest.raises(ValueError, match=mensagem):
        despesa_recorrente_service.criar(dados)


def test_listar_ordena_por_dia(despesas):
    assert [d.dia_vencimento for d in despesa_recorrente_service.listar()] == [5, 10, 31]


def test_gerar_para_mes_e_idempotente(despesas):
    assert despesa_recorrente_service.gerar_para_mes('2025-04') == 3
    db.session.commit()
    assert despesa_recorrente_service.gerar_para_mes('2025-04-15') == 0
    db.session.commit()

    vencimentos = sorted(c.data_vencimento for c in ContaPagar.query.all())
    assert vencimentos == [date(2025, 4, 5), date(2025, 4, 10), date(2025, 4, 30)]
    aluguel = db.session.get(DespesaRecorrente, despesas[1].id)
    assert aluguel.ultima_geracao == date(2025, 4, 30)


def test_gerar_para_mes_ignora_inativas(despesas):
    despesa_recorrente_service.desativar(despesas[0].id)
    db.session.commit()

    assert despesa_recorrente_service.gerar_para_mes('2025-04') == 2


def test_gerar_para_mes_invalido(app):
    with pytest.raises(ValueError):
        despesa_recorrente_service.gerar_para_mes('abril')


def test_excluir_preserva_contas_geradas(despesas):
    despesa_recorrente_service.gerar_para_mes('2025-04')
    db.session.commit()
    internet = despesas[0].id

    despesa_recorrente_service.excluir(internet)
    db.session.commit()

    assert db.session.get(DespesaRecorrente, internet) is None
    conta = ContaPagar.query.filter_by(descricao='Internet').one()
    assert conta.despesa_recorrente_id is None
    assert conta.status == 'Pendente'


def test_desativar_nao_cancela_contas(despesas):
    despesa_recorrente_service.gerar_para_mes('2025-04')
    despesa_recorrente_service.desativar(despesas[0].id)
    db.session.commit()

    assert ContaPagar.query.filter_by(despesa_recorrente_id=despesas[0].id).count() == 1
