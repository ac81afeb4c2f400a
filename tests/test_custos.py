from datetime import date
from decimal import Decimal

import pytest

from locadora.models import db, Abastecimento, Custo, DanoInspecao, Multa
from locadora.services import custo_virtual_service
from locadora.services.custo_service import CustoService


def _custo(**campos):
    dados = {'descricao': 'Lavagem', 'categoria': 'Avulsa', 'valor': '50.00', 'data_custo': '2025-03-01'}
    dados.update(campos)
    custo = CustoService.criar_custo(dados)
    db.session.commit()
    return custo


def test_criar_custo_com_padroes(app):
    custo = _custo(categoria=None, valor=None, referencia_origem_tipo='desconhecido')

    assert custo.categoria == 'Combustível'
    assert custo.status == 'Pendente'
    assert custo.origem == 'Sistema'
    assert custo.valor == 0
    assert custo.valor_a_definir is True
    assert custo.criado_por_nome == 'Usuário do Sistema'
    assert custo.referencia_origem_tipo == 'service_note'


@pytest.mark.parametrize('campos', [
    {'descricao': ''},
    {'categoria': 'Lazer'},
    {'status': 'Cancelado'},
    {'valor': '-1'},
])
def test_criar_custo_invalido(app, campos):
    with pytest.raises(ValueError):
        _custo(**campos)


def test_custo_a_definir_fica_fora_dos_totais(app):
    _custo(valor='100.00', status='Pago')
    _custo(valor='40.00', status='Pendente')
    _custo(valor='0', status='Pendente', descricao='Orçamento de funilaria', categoria='Funilaria')

    totais = CustoService.totais(Custo.query.all())
    assert totais['total_pago'] == 100.0
    assert totais['total_pendente'] == 40.0
    assert totais['total_geral'] == 140.0
    assert totais['qtd_a_definir'] == 1


def test_estimativa_inclui_custo_nos_totais(app):
    custo = _custo(valor='0', status='Pendente', categoria='Funilaria')

    custo_virtual_service.atualizar_estimativa(custo.id, '350.00', observacoes='Orçamento oficina X')
    db.session.commit()

    totais = CustoService.totais(Custo.query.all())
    assert totais['total_pendente'] == 350.0
    assert totais['qtd_a_definir'] == 0
    assert db.session.get(Custo, custo.id).observacoes == 'Orçamento oficina X'


def test_estatisticas_por_origem_ignora_a_definir(app):
    _custo(valor='100.00', origem='Patio')
    _custo(valor='0', origem='Patio')
    _custo(valor='30.00', origem='Compras')

    stats = CustoService.estatisticas_por_origem()
    assert stats['Patio'] == {'quantidade': 1, 'valor_total': 100.0}
    assert stats['Compras']['valor_total'] == 30.0
    assert stats['Manutencao']['quantidade'] == 0


def test_autorizar_custo_pago_falha(app):
    custo = _custo(status='Pago')
    with pytest.raises(ValueError):
        CustoService.autorizar_custo(custo.id)


def test_custo_recorrente_calcula_proximo_vencimento(app):
    custo = CustoService.criar_custo_recorrente({
        'descricao': 'Rastreador', 'categoria': 'Despesas', 'valor': '89.90',
        'data_custo': '2025-01-31', 'tipo_recorrencia': 'monthly',
    })
    db.session.commit()

    assert custo.recorrente is True
    assert custo.dia_recorrencia == 31
    assert custo.proximo_vencimento == date(2025, 2, 28)

    CustoService.atualizar_custo(custo.id, {'data_custo': '2025-03-10'})
    db.session.commit()
    assert custo.proximo_vencimento == date(2025, 4, 10)


def test_consultas_de_recorrentes(app):
    for descricao, data_custo in (('Vencido', '2025-01-01'), ('Próximo', '2025-02-27'), ('Futuro', '2025-05-01')):
        CustoService.criar_custo_recorrente({
            'descricao': descricao, 'categoria': 'Despesas', 'valor': '10', 'data_custo': data_custo,
        })
    db.session.commit()
    hoje = date(2025, 3, 25)

    assert [c.descricao for c in CustoService.custos_recorrentes_vencidos(hoje)] == ['Vencido']
    assert [c.descricao for c in CustoService.custos_recorrentes_proximos(hoje)] == ['Próximo']
    stats = CustoService.estatisticas_recorrentes(hoje)
    assert stats['total'] == 3
    assert stats['vencidos'] == 1
    assert stats['proximos'] == 1
    assert CustoService.listar_custos() == []


# ============================================================================
# CUSTOS VIRTUAIS
# ============================================================================

@pytest.fixture
def fontes(app, veiculo, contrato):
    multa = Multa(veiculo_id=veiculo.id, contrato_id=contrato.id, cliente_id=contrato.cliente_id,
                  numero='AIT-1', tipo_infracao='Excesso de velocidade', valor=Decimal('195.23'),
                  data_infracao=date(2025, 3, 3), pago=False)
    dano = DanoInspecao(veiculo_id=veiculo.id, contrato_id=contrato.id, local='Para-choque traseiro',
                        tipo_dano='Amassado', severidade='Média', descricao='Amassado no para-choque',
                        custo_estimado=Decimal('0'))
    abastecimento = Abastecimento(veiculo_id=veiculo.id, tipo_combustivel='Diesel', litros=Decimal('40'),
                                  custo_combustivel=Decimal('240.00'), data_abastecimento=date(2025, 3, 4),
                                  pago=True)
    sem_valor = Abastecimento(veiculo_id=veiculo.id, tipo_combustivel='Diesel', litros=Decimal('10'))
    db.session.add_all([multa, dano, abastecimento, sem_valor])
    db.session.commit()
    return {'multa': multa, 'dano': dano, 'abastecimento': abastecimento}


def test_projecao_de_custos_virtuais(fontes, cliente):
    itens = {i['id']: i for i in custo_virtual_service.listar_custos_virtuais()}

    assert set(itens) == {
        f"fine_{fontes['multa'].id}",
        f"damage_{fontes['dano'].id}",
        f"fuel_{fontes['abastecimento'].id}",
    }

    multa = itens[f"fine_{fontes['multa'].id}"]
    assert multa['categoria'] == 'Multa'
    assert multa['status'] == 'Pendente'
    assert multa['valor'] == 195.23
    assert multa['cliente_nome'] == cliente.nome
    assert multa['veiculo_placa'] == 'ABC1D23'
    assert multa['is_real_cost'] is True
    assert multa['source_type'] == 'fine'

    dano = itens[f"damage_{fontes['dano'].id}"]
    assert dano['categoria'] == 'Funilaria'
    assert dano['valor_a_definir'] is True

    combustivel = itens[f"fuel_{fontes['abastecimento'].id}"]
    assert combustivel['status'] == 'Pago'
    assert combustivel['descricao'].startswith('Combustível: Diesel')


def test_livro_unificado_com_filtros(fontes):
    _custo(valor='80.00', categoria='Avulsa')

    assert len(custo_virtual_service.listar_livro_custos()) == 4
    assert [i['id'] for i in custo_virtual_service.listar_livro_custos(somente_a_definir=True)] == [
        f"damage_{fontes['dano'].id}"
    ]
    assert len(custo_virtual_service.listar_livro_custos(categoria='Multa')) == 1


def test_estimativa_de_dano_grava_na_inspecao(fontes):
    dano_id = fontes['dano'].id

    item = custo_virtual_service.atualizar_estimativa(f'damage_{dano_id}', 780, observacoes='Orçamento recebido')
    db.session.commit()

    dano = db.session.get(DanoInspecao, dano_id)
    assert dano.custo_estimado == Decimal('780')
    assert dano.observacoes == 'Orçamento recebido'
    assert item['valor'] == 780.0
    assert item['status'] == 'Autorizado'
    assert item['valor_a_definir'] is False
    assert Custo.query.count() == 0


def test_estimativa_de_multa_e_abastecimento(fontes):
    custo_virtual_service.atualizar_estimativa(f"fine_{fontes['multa'].id}", '293.47')
    custo_virtual_service.atualizar_estimativa(f"fuel_{fontes['abastecimento'].id}", '250')
    db.session.commit()

    assert db.session.get(Multa, fontes['multa'].id).valor == Decimal('293.47')
    assert db.session.get(Abastecimento, fontes['abastecimento'].id).custo_combustivel == Decimal('250')


@pytest.mark.parametrize('custo_id', ['guest_1', 'fine_abc', 'damage_999', '', 'fuel_'])
def test_estimativa_com_id_invalido(fontes, custo_id):
    with pytest.raises(ValueError):
        custo_virtual_service.atualizar_estimativa(custo_id, 10)


def test_estimativa_negativa(fontes):
    with pytest.raises(ValueError):
        custo_virtual_service.atualizar_estimativa(f"fine_{fontes['multa'].id}", -5)
