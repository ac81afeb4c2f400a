"""
Script para inicializar o banco de dados

Executa:
- Criação das tabelas
- Opcionalmente popula com dados de exemplo (--exemplo)

Uso: python -m locadora.init_db [--exemplo]
"""
import sys
from datetime import date
from decimal import Decimal

from locadora.app import create_app
from locadora.config import BASE_DIR
from locadora.models import db, Cliente, Funcionario, Motorista, Veiculo
from locadora.services import despesa_recorrente_service


def init_database(with_sample_data=False, config_name='development'):
    app = create_app(config_name)

    with app.app_context():
        (BASE_DIR / 'data').mkdir(exist_ok=True)

        print("=> Criando tabelas do banco de dados...")
        db.create_all()
        print("=> Tabelas criadas com sucesso!")

        if with_sample_data:
            print("\n=> Populando banco com dados de exemplo...")
            populate_sample_data()
            db.session.commit()
            print("=> Dados de exemplo inseridos com sucesso!")

        print("\n=> Para iniciar o servidor, execute: python -m locadora.app")
    return app


def populate_sample_data():
    """Frota, pessoas e despesas fixas mínimas para testar o fluxo financeiro"""
    db.session.add_all([
        Veiculo(placa='ABC1D23', modelo='Fiat Ducato', ano=2022, tipo='Van', combustivel='Diesel'),
        Veiculo(placa='EFG4H56', modelo='Renault Master', ano=2021, tipo='Furgão', combustivel='Diesel'),
        Funcionario(nome='Ana Souza', cargo='Gerente', codigo='F001',
                    salario_base=Decimal('5200.00'), dia_pagamento=5),
        Funcionario(nome='Carlos Lima', cargo='Pátio', codigo='F002',
                    salario_base=Decimal('2400.00'), dia_pagamento=5),
        Cliente(nome='Transportes Rápidos Ltda', documento='12.345.678/0001-90'),
        Motorista(nome='João Pereira', cpf='123.456.789-00', cnh='01234567890'),
    ])
    db.session.flush()

    for descricao, valor, dia in (('Internet', '150.00', 10), ('Aluguel do pátio', '3500.00', 5)):
        despesa_recorrente_service.criar({
            'descricao': descricao,
            'valor': valor,
            'dia_vencimento': dia,
            'categoria': 'Despesa Recorrente',
        })
    despesa_recorrente_service.gerar_para_mes(date.today())


if __name__ == '__main__':
    init_database(with_sample_data='--exemplo' in sys.argv)
