from datetime import date
from decimal import Decimal
from unittest import mock

import pytest

from locadora.models import db, Abastecimento, DanoInspecao, Funcionario, Multa, NotificacaoDano, Salario
from locadora.services import (
    abastecimento_service,
    custo_virtual_service,
    funcionario_service,
    inspecao_service,
    multa_service,
    notificacao_service,
)
from locadora.services.salario_service import SalarioService


def _dados_multa(veiculo, **campos):
    dados = {
        'veiculo_id': veiculo.id,
        'numero': 'AIT-2025-001',
        'tipo_infracao': 'Excesso de velocidade',
        'valor': '195.23',
        'data_infracao': '2025-03-05',
        'data_vencimento': '2025-04-05',
    }
    dados.update(campos)
    return dados


def _dados_dano(**campos):
    dados = {'local': 'Para-choque traseiro', 'descricao': 'Amassado na lateral esquerda',
             'tipo_dano': 'Amassado', 'severidade': 'Média'}
    dados.update(campos)
    return dados


# ---------------------------------------------------------------- multas

def test_criar_multa_aparece_no_livro_de_custos(veiculo, contrato, cliente):
    multa = multa_service.criar_multa(_dados_multa(veiculo, contrato_id=contrato.id))
    db.session.commit()

    assert multa.valor == Decimal('195.23')
    assert multa.cliente_id == cliente.id
    assert multa.pago is False

    projetados = custo_virtual_service.listar_custos_virtuais(veiculo_id=veiculo.id)
    assert [c['id'] for c in projetados] == [f'fine_{multa.id}']
    assert projetados[0]['cliente_nome'] == 'Transportes Rápidos Ltda'
    assert projetados[0]['status'] == 'Pendente'


def test_multa_valida_campos_obrigatorios(veiculo):
    with pytest.raises(ValueError, match='Veículo não encontrado'):
        multa_service.criar_multa(_dados_multa(veiculo, veiculo_id=999))
    with pytest.raises(ValueError, match='Tipo de infração'):
        multa_service.criar_multa(_dados_multa(veiculo, tipo_infracao=' '))
    with pytest.raises(ValueError, match='maior que zero'):
        multa_service.criar_multa(_dados_multa(veiculo, valor=0))
    with pytest.raises(ValueError, match='maior que zero'):
        multa_service.criar_multa(_dados_multa(veiculo, valor='NaN'))
    with pytest.raises(ValueError, match='Data de vencimento'):
        multa_service.criar_multa(_dados_multa(veiculo, data_vencimento=None))


def test_numero_de_multa_unico_e_vazio_vira_nulo(veiculo):
    multa_service.criar_multa(_dados_multa(veiculo))
    sem_numero = multa_service.criar_multa(_dados_multa(veiculo, numero='  '))
    db.session.commit()

    assert sem_numero.numero is None
    with pytest.raises(ValueError, match='Já existe uma multa'):
        multa_service.criar_multa(_dados_multa(veiculo))


def test_rotas_de_multa(client, veiculo):
    resposta = client.post('/api/multas', json=_dados_multa(veiculo))
    assert resposta.status_code == 201
    multa_id = resposta.get_json()['data']['id']

    resposta = client.put(f'/api/multas/{multa_id}', json={'pago': True})
    assert resposta.get_json()['data']['pago'] is True
    assert client.get('/api/multas?pago=false').get_json()['total'] == 0

    assert client.post('/api/multas', json=_dados_multa(veiculo, numero='X', valor=-1)).status_code == 400
    assert client.put('/api/multas/999', json={'pago': True}).status_code == 404
    assert client.delete(f'/api/multas/{multa_id}').status_code == 200
    assert Multa.query.count() == 0


# ------------------------------------------------------------ abastecimentos

def test_criar_abastecimento(veiculo):
    registro = abastecimento_service.criar_abastecimento({
        'veiculo_id': veiculo.id, 'tipo_combustivel': 'Diesel', 'litros': '50',
        'custo_combustivel': '310.00', 'data_abastecimento': '2025-03-15', 'quilometragem': '48210',
    })
    db.session.commit()

    assert registro.quilometragem == 48210
    projetados = custo_virtual_service.listar_custos_virtuais(veiculo_id=veiculo.id)
    assert projetados[0]['id'] == f'fuel_{registro.id}'
    assert projetados[0]['valor'] == 310.0


def test_abastecimento_sem_custo_fica_fora_do_livro(veiculo):
    registro = abastecimento_service.criar_abastecimento({'veiculo_id': veiculo.id, 'litros': 40})
    db.session.commit()

    assert registro.tipo_combustivel == 'Gasolina'
    assert registro.data_abastecimento == date.today()
    assert custo_virtual_service.listar_custos_virtuais() == []


def test_abastecimento_invalido(veiculo):
    with pytest.raises(ValueError, match='litros'):
        abastecimento_service.criar_abastecimento({'veiculo_id': veiculo.id, 'litros': 0})
    with pytest.raises(ValueError, match='Custo'):
        abastecimento_service.criar_abastecimento({'veiculo_id': veiculo.id, 'litros': 10,
                                                   'custo_combustivel': 'abc'})
    with pytest.raises(ValueError, match='Quilometragem'):
        abastecimento_service.criar_abastecimento({'veiculo_id': veiculo.id, 'litros': 10,
                                                   'quilometragem': -5})


def test_rotas_de_abastecimento(client, veiculo):
    resposta = client.post('/api/abastecimentos', json={'veiculo_id': veiculo.id, 'litros': 45.5,
                                                        'custo_combustivel': 280.0})
    assert resposta.status_code == 201
    assert resposta.get_json()['data']['litros'] == 45.5

    assert client.get(f'/api/abastecimentos?veiculo_id={veiculo.id}').get_json()['total'] == 1
    assert client.post('/api/abastecimentos', json={'veiculo_id': 999, 'litros': 10}).status_code == 404
    assert client.post('/api/abastecimentos', json={'veiculo_id': veiculo.id}).status_code == 400
    assert Abastecimento.query.count() == 1


# -------------------------------------------------------------------- danos

def test_registrar_dano_enfileira_notificacao(veiculo):
    dano, notificacao = inspecao_service.registrar_dano(veiculo.id, _dados_dano())
    db.session.commit()

    assert notificacao.status == 'pendente'
    assert notificacao.dano_id == dano.id
    assert notificacao_service.listar_pendentes() == [notificacao]
    assert '"veiculo_placa": "ABC1D23"' in notificacao.dados_json

    projetado = custo_virtual_service.listar_custos_virtuais(veiculo_id=veiculo.id)[0]
    assert projetado['id'] == f'damage_{dano.id}'
    assert projetado['valor_a_definir'] is True


def test_dano_registrado_e_enviado_por_email(veiculo):
    inspecao_service.registrar_dano(veiculo.id, _dados_dano(severidade='Alta'))
    db.session.commit()

    with mock.patch('locadora.services.notificacao_service.requests.post', return_value=mock.Mock()) as post:
        resultados = notificacao_service.processar_pendentes()

    assert [r['status'] for r in resultados] == ['enviada']
    assert post.call_count == 1


def test_dano_invalido_nao_enfileira(veiculo):
    with pytest.raises(ValueError, match='Localização'):
        inspecao_service.registrar_dano(veiculo.id, _dados_dano(local=''))
    with pytest.raises(ValueError, match='Tipo de dano'):
        inspecao_service.registrar_dano(veiculo.id, _dados_dano(tipo_dano='Sujeira'))
    with pytest.raises(ValueError, match='Severidade'):
        inspecao_service.registrar_dano(veiculo.id, _dados_dano(severidade='Crítica'))
    with pytest.raises(ValueError, match='Veículo não encontrado'):
        inspecao_service.registrar_dano(999, _dados_dano())

    assert DanoInspecao.query.count() == 0
    assert NotificacaoDano.query.count() == 0


def test_rotas_de_dano(client, veiculo):
    resposta = client.post(f'/api/veiculos/{veiculo.id}/danos', json=_dados_dano(custo_estimado=450.0))
    assert resposta.status_code == 201
    corpo = resposta.get_json()
    assert corpo['data']['custo_estimado'] == 450.0
    assert corpo['notificacao']['status'] == 'pendente'

    assert client.get(f'/api/veiculos/{veiculo.id}/danos?reparado=false').get_json()['total'] == 1
    assert client.post(f'/api/veiculos/{veiculo.id}/danos', json=_dados_dano(descricao='')).status_code == 400
    assert client.post('/api/veiculos/999/danos', json=_dados_dano()).status_code == 404
    assert NotificacaoDano.query.count() == 1


# ------------------------------------------------------------- funcionários

def test_funcionario_cadastrado_entra_na_folha(app):
    funcionario = funcionario_service.criar_funcionario({
        'nome': ' Carlos Lima ', 'cargo': 'Mecânico', 'codigo': 'F010',
        'salario_base': '3100.00', 'dia_pagamento': 31,
    })
    db.session.commit()

    assert funcionario.nome == 'Carlos Lima'
    assert funcionario.ativo is True

    assert SalarioService.gerar_salarios_mes('2025-02') == 1
    db.session.commit()
    salario = Salario.query.one()
    assert salario.valor == Decimal('3100.00')
    assert salario.data_pagamento == date(2025, 2, 28)


def test_funcionario_desativado_sai_da_folha(funcionario):
    funcionario_service.desativar_funcionario(funcionario.id)
    db.session.commit()

    assert SalarioService.gerar_salarios_mes('2025-03') == 0
    assert funcionario_service.listar_funcionarios(ativo=True) == []


def test_funcionario_invalido(funcionario):
    with pytest.raises(ValueError, match='Nome'):
        funcionario_service.criar_funcionario({'nome': ''})
    with pytest.raises(ValueError, match='código'):
        funcionario_service.criar_funcionario({'nome': 'Outro', 'codigo': 'F001'})
    with pytest.raises(ValueError, match='Salário base'):
        funcionario_service.criar_funcionario({'nome': 'Outro', 'salario_base': -1})
    with pytest.raises(ValueError, match='Dia de pagamento'):
        funcionario_service.atualizar_funcionario(funcionario.id, {'dia_pagamento': 32})


def test_rotas_de_funcionario(client, funcionario):
    resposta = client.post('/api/funcionarios', json={'nome': 'Bruno Alves', 'salario_base': 2800.0})
    assert resposta.status_code == 201
    funcionario_id = resposta.get_json()['data']['id']

    resposta = client.put(f'/api/funcionarios/{funcionario_id}', json={'cargo': 'Motorista', 'dia_pagamento': 10})
    assert resposta.get_json()['data']['dia_pagamento'] == 10

    resposta = client.post(f'/api/funcionarios/{funcionario_id}/desativar')
    assert resposta.get_json()['data']['ativo'] is False
    assert client.get('/api/funcionarios?ativo=true').get_json()['total'] == 1

    assert client.put(f'/api/funcionarios/{funcionario_id}', json={'codigo': 'F001'}).status_code == 400
    assert client.post('/api/funcionarios/999/desativar').status_code == 404
    assert db.session.get(Funcionario, funcionario_id).cargo == 'Motorista'
