from datetime import date
from decimal import Decimal

import pytest

from locadora import eventos
from locadora.app import create_app
from locadora.models import db, Cliente, Contrato, Funcionario, Veiculo


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
    eventos.cancelar_todas()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def veiculo(app):
    v = Veiculo(placa='ABC1D23', modelo='Fiat Ducato', ano=2022, tipo='Van', status='Disponível')
    db.session.add(v)
    db.session.commit()
    return v


@pytest.fixture
def cliente(app):
    c = Cliente(nome='Transportes Rápidos Ltda', documento='12.345.678/0001-90')
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def contrato(app, cliente, veiculo):
    c = Contrato(numero='CT-0001', cliente_id=cliente.id, veiculo_id=veiculo.id,
                 data_inicio=date(2025, 3, 1), valor_diaria=Decimal('180.00'), status='Ativo')
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def funcionario(app):
    f = Funcionario(nome='Ana Souza', cargo='Gerente', codigo='F001',
                    salario_base=Decimal('5200.00'), dia_pagamento=5, ativo=True)
    db.session.add(f)
    db.session.commit()
    return f
