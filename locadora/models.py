"""
Modelos do banco de dados - Gestão de Locadora

Tabelas organizadas em 3 módulos:
- Módulo 1: Frota e Pessoas (veículos, motoristas, clientes, contratos, funcionários)
- Módulo 2: Custos (custos, multas, danos de inspeção, abastecimentos)
- Módulo 3: Financeiro (contas a pagar, despesas recorrentes, salários)
"""
from datetime import datetime, date
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _float(valor):
    return float(valor) if valor is not None else None


def _iso(valor):
    return valor.isoformat() if valor else None


# ============================================================================
# MÓDULO 1: FROTA E PESSOAS
# ============================================================================

class Funcionario(db.Model):
    """
    Funcionário da locadora (gerente, financeiro, pátio, mecânico...)
    """
    __tablename__ = 'funcionario'

    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False)
    cargo = db.Column(db.String(60))
    codigo = db.Column(db.String(20), unique=True)
    email = db.Column(db.String(150))
    salario_base = db.Column(db.Numeric(10, 2))
    dia_pagamento = db.Column(db.Integer, default=5)
    ativo = db.Column(db.Boolean, default=True)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)

    salarios = db.relationship('Salario', back_populates='funcionario', lazy='dynamic')

    def __repr__(self):
        return f'<Funcionario {self.nome}>'

    def to_dict(self):
        return {
            'id': self.id,
            'nome': self.nome,
            'cargo': self.cargo,
            'codigo': self.codigo,
            'email': self.email,
            'salario_base': _float(self.salario_base),
            'dia_pagamento': self.dia_pagamento,
            'ativo': self.ativo
        }


class Veiculo(db.Model):
    """
    Veículo da frota (furgão ou van)
    """
    __tablename__ = 'veiculo'

    id = db.Column(db.Integer, primary_key=True)
    placa = db.Column(db.String(10), nullable=False, unique=True)
    modelo = db.Column(db.String(100), nullable=False)
    ano = db.Column(db.Integer)
    tipo = db.Column(db.String(20))  # 'Furgão' ou 'Van'
    combustivel = db.Column(db.String(20))
    quilometragem = db.Column(db.Integer)
    status = db.Column(db.String(20), default='Disponível')  # 'Disponível', 'Em Uso', 'Manutenção', 'Inativo', 'No Patio'
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Veiculo {self.placa}>'

    def to_dict(self):
        return {
            'id': self.id,
            'placa': self.placa,
            'modelo': self.modelo,
            'ano': self.ano,
            'tipo': self.tipo,
            'combustivel': self.combustivel,
            'quilometragem': self.quilometragem,
            'status': self.status
        }


class Motorista(db.Model):
    """
    Motorista habilitado a retirar veículos
    """
    __tablename__ = 'motorista'

    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False)
    cpf = db.Column(db.String(14), unique=True)
    cnh = db.Column(db.String(20))
    telefone = db.Column(db.String(20))
    ativo = db.Column(db.Boolean, default=True)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    atribuicoes = db.relationship('MotoristaVeiculo', back_populates='motorista', lazy='dynamic',
                                  cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Motorista {self.nome}>'

    def to_dict(self):
        return {
            'id': self.id,
            'nome': self.nome,
            'cpf': self.cpf,
            'cnh': self.cnh,
            'telefone': self.telefone,
            'ativo': self.ativo
        }


class MotoristaVeiculo(db.Model):
    """
    Atribuição de veículo a motorista (remoção lógica via ativo=False)
    """
    __tablename__ = 'motorista_veiculo'

    id = db.Column(db.Integer, primary_key=True)
    motorista_id = db.Column(db.Integer, db.ForeignKey('motorista.id'), nullable=False)
    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'), nullable=False)
    contrato_id = db.Column(db.Integer, db.ForeignKey('contrato.id'))
    ativo = db.Column(db.Boolean, default=True)
    atribuido_em = db.Column(db.DateTime, default=datetime.utcnow)
    removido_em = db.Column(db.DateTime)

    motorista = db.relationship('Motorista', back_populates='atribuicoes')
    veiculo = db.relationship('Veiculo')

    __table_args__ = (
        db.Index('idx_motorista_veiculo_ativo', 'motorista_id', 'ativo'),
    )

    def __repr__(self):
        return f'<MotoristaVeiculo M:{self.motorista_id} V:{self.veiculo_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'motorista_id': self.motorista_id,
            'veiculo_id': self.veiculo_id,
            'contrato_id': self.contrato_id,
            'ativo': self.ativo,
            'atribuido_em': _iso(self.atribuido_em),
            'removido_em': _iso(self.removido_em),
            'veiculo': self.veiculo.to_dict() if self.veiculo else None
        }


class Cliente(db.Model):
    """
    Cliente (pessoa física ou jurídica) que aluga veículos
    """
    __tablename__ = 'cliente'

    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False)
    documento = db.Column(db.String(20))
    email = db.Column(db.String(150))
    telefone = db.Column(db.String(20))
    ativo = db.Column(db.Boolean, default=True)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)

    contratos = db.relationship('Contrato', back_populates='cliente', lazy='dynamic')

    def __repr__(self):
        return f'<Cliente {self.nome}>'

    def to_dict(self):
        return {
            'id': self.id,
            'nome': self.nome,
            'documento': self.documento,
            'email': self.email,
            'telefone': self.telefone,
            'ativo': self.ativo
        }


class Contrato(db.Model):
    """
    Contrato de locação de um veículo para um cliente
    """
    __tablename__ = 'contrato'

    id = db.Column(db.Integer, primary_key=True)
    numero = db.Column(db.String(30), nullable=False, unique=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey('cliente.id'), nullable=False)
    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'))
    data_inicio = db.Column(db.Date, nullable=False)
    data_fim = db.Column(db.Date)
    valor_diaria = db.Column(db.Numeric(10, 2))
    status = db.Column(db.String(20), default='Ativo')  # 'Ativo', 'Finalizado', 'Cancelado'
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)

    cliente = db.relationship('Cliente', back_populates='contratos')
    veiculo = db.relationship('Veiculo')

    def __repr__(self):
        return f'<Contrato {self.numero}>'

    def to_dict(self):
        return {
            'id': self.id,
            'numero': self.numero,
            'cliente_id': self.cliente_id,
            'veiculo_id': self.veiculo_id,
            'data_inicio': _iso(self.data_inicio),
            'data_fim': _iso(self.data_fim),
            'valor_diaria': _float(self.valor_diaria),
            'status': self.status,
            'veiculo': {'placa': self.veiculo.placa, 'modelo': self.veiculo.modelo} if self.veiculo else None
        }


# ============================================================================
# MÓDULO 2: CUSTOS
# ============================================================================

class Custo(db.Model):
    """
    Lançamento de custo - registro oficial de toda movimentação financeira

    Produzido por vários subsistemas (usuário, pátio, manutenção, compras,
    financeiro). valor = 0 com status 'Pendente' significa "valor a definir".
    """
    __tablename__ = 'custo'

    id = db.Column(db.Integer, primary_key=True)
    categoria = db.Column(db.String(30), nullable=False)
    descricao = db.Column(db.String(255), nullable=False)
    valor = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    data_custo = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), default='Pendente')  # 'Pendente', 'Autorizado', 'Pago'
    origem = db.Column(db.String(20), default='Sistema')
    documento_ref = db.Column(db.String(100))
    observacoes = db.Column(db.Text)
    departamento = db.Column(db.String(60))

    criado_por_funcionario_id = db.Column(db.Integer, db.ForeignKey('funcionario.id'))
    criado_por_nome = db.Column(db.String(150))

    # Ponteiro "solto" para o registro que originou o custo
    referencia_origem_id = db.Column(db.Integer)
    referencia_origem_tipo = db.Column(db.String(30))

    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'))
    cliente_id = db.Column(db.Integer, db.ForeignKey('cliente.id'))
    cliente_nome = db.Column(db.String(150))
    contrato_id = db.Column(db.Integer, db.ForeignKey('contrato.id'))

    # Recorrência
    recorrente = db.Column(db.Boolean, default=False)
    tipo_recorrencia = db.Column(db.String(10))  # 'monthly', 'weekly', 'yearly'
    dia_recorrencia = db.Column(db.Integer)
    proximo_vencimento = db.Column(db.Date)
    custo_recorrente_pai_id = db.Column(db.Integer, db.ForeignKey('custo.id'))
    gerado_automaticamente = db.Column(db.Boolean, default=False)

    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    veiculo = db.relationship('Veiculo')
    cliente = db.relationship('Cliente')
    contrato = db.relationship('Contrato')
    criado_por = db.relationship('Funcionario')

    __table_args__ = (
        db.Index('idx_custo_data', 'data_custo'),
        db.Index('idx_custo_status', 'status'),
        db.Index('idx_custo_referencia', 'referencia_origem_tipo', 'referencia_origem_id'),
    )

    @property
    def valor_a_definir(self):
        return (self.valor is None or self.valor == 0) and self.status == 'Pendente'

    def __repr__(self):
        return f'<Custo {self.categoria} R${self.valor} {self.status}>'

    def to_dict(self):
        return {
            'id': self.id,
            'categoria': self.categoria,
            'descricao': self.descricao,
            'valor': _float(self.valor) or 0.0,
            'data_custo': _iso(self.data_custo),
            'status': self.status,
            'origem': self.origem,
            'documento_ref': self.documento_ref,
            'observacoes': self.observacoes,
            'departamento': self.departamento,
            'criado_por_funcionario_id': self.criado_por_funcionario_id,
            'criado_por_nome': self.criado_por_nome,
            'referencia_origem_id': self.referencia_origem_id,
            'referencia_origem_tipo': self.referencia_origem_tipo,
            'veiculo_id': self.veiculo_id,
            'veiculo_placa': self.veiculo.placa if self.veiculo else None,
            'veiculo_modelo': self.veiculo.modelo if self.veiculo else None,
            'cliente_id': self.cliente_id,
            'cliente_nome': self.cliente_nome or (self.cliente.nome if self.cliente else None),
            'contrato_id': self.contrato_id,
            'recorrente': bool(self.recorrente),
            'tipo_recorrencia': self.tipo_recorrencia,
            'dia_recorrencia': self.dia_recorrencia,
            'proximo_vencimento': _iso(self.proximo_vencimento),
            'custo_recorrente_pai_id': self.custo_recorrente_pai_id,
            'gerado_automaticamente': bool(self.gerado_automaticamente),
            'valor_a_definir': self.valor_a_definir,
            'is_real_cost': False,
            'source_type': None,
            'criado_em': _iso(self.criado_em)
        }


class Multa(db.Model):
    """
    Multa de trânsito vinculada a veículo (e opcionalmente a contrato/motorista)
    """
    __tablename__ = 'multa'

    id = db.Column(db.Integer, primary_key=True)
    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'), nullable=False)
    motorista_id = db.Column(db.Integer, db.ForeignKey('motorista.id'))
    contrato_id = db.Column(db.Integer, db.ForeignKey('contrato.id'))
    cliente_id = db.Column(db.Integer, db.ForeignKey('cliente.id'))
    numero = db.Column(db.String(40))
    tipo_infracao = db.Column(db.String(150))
    descricao = db.Column(db.Text)
    valor = db.Column(db.Numeric(10, 2), default=0)
    data_infracao = db.Column(db.Date)
    data_vencimento = db.Column(db.Date)
    pago = db.Column(db.Boolean, default=False)
    observacoes = db.Column(db.Text)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    veiculo = db.relationship('Veiculo')
    contrato = db.relationship('Contrato')

    def __repr__(self):
        return f'<Multa {self.numero} R${self.valor}>'

    def to_dict(self):
        return {
            'id': self.id,
            'veiculo_id': self.veiculo_id,
            'motorista_id': self.motorista_id,
            'contrato_id': self.contrato_id,
            'cliente_id': self.cliente_id,
            'numero': self.numero,
            'tipo_infracao': self.tipo_infracao,
            'descricao': self.descricao,
            'valor': _float(self.valor) or 0.0,
            'data_infracao': _iso(self.data_infracao),
            'data_vencimento': _iso(self.data_vencimento),
            'pago': self.pago,
            'observacoes': self.observacoes
        }


class DanoInspecao(db.Model):
    """
    Dano identificado em inspeção de check-in/check-out
    """
    __tablename__ = 'dano_inspecao'

    id = db.Column(db.Integer, primary_key=True)
    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'), nullable=False)
    contrato_id = db.Column(db.Integer, db.ForeignKey('contrato.id'))
    local = db.Column(db.String(100))
    tipo_dano = db.Column(db.String(60))
    severidade = db.Column(db.String(20))  # 'Baixa', 'Média', 'Alta'
    descricao = db.Column(db.Text)
    custo_estimado = db.Column(db.Numeric(10, 2), default=0)
    requer_reparo = db.Column(db.Boolean, default=True)
    reparado = db.Column(db.Boolean, default=False)
    observacoes = db.Column(db.Text)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    veiculo = db.relationship('Veiculo')
    contrato = db.relationship('Contrato')

    def __repr__(self):
        return f'<DanoInspecao {self.local} {self.severidade}>'

    def to_dict(self):
        return {
            'id': self.id,
            'veiculo_id': self.veiculo_id,
            'contrato_id': self.contrato_id,
            'local': self.local,
            'tipo_dano': self.tipo_dano,
            'severidade': self.severidade,
            'descricao': self.descricao,
            'custo_estimado': _float(self.custo_estimado) or 0.0,
            'requer_reparo': self.requer_reparo,
            'reparado': self.reparado,
            'observacoes': self.observacoes,
            'criado_em': _iso(self.criado_em)
        }


class Abastecimento(db.Model):
    """
    Registro de combustível lançado em check-in de manutenção
    """
    __tablename__ = 'abastecimento'

    id = db.Column(db.Integer, primary_key=True)
    veiculo_id = db.Column(db.Integer, db.ForeignKey('veiculo.id'), nullable=False)
    contrato_id = db.Column(db.Integer, db.ForeignKey('contrato.id'))
    tipo_combustivel = db.Column(db.String(20), default='Gasolina')
    litros = db.Column(db.Numeric(10, 2))
    custo_combustivel = db.Column(db.Numeric(10, 2))
    data_abastecimento = db.Column(db.Date)
    quilometragem = db.Column(db.Integer)
    pago = db.Column(db.Boolean, default=False)
    observacoes = db.Column(db.Text)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    veiculo = db.relationship('Veiculo')
    contrato = db.relationship('Contrato')

    def __repr__(self):
        return f'<Abastecimento V:{self.veiculo_id} {self.litros}L>'

    def to_dict(self):
        return {
            'id': self.id,
            'veiculo_id': self.veiculo_id,
            'contrato_id': self.contrato_id,
            'tipo_combustivel': self.tipo_combustivel,
            'litros': _float(self.litros),
            'custo_combustivel': _float(self.custo_combustivel),
            'data_abastecimento': _iso(self.data_abastecimento),
            'quilometragem': self.quilometragem,
            'pago': self.pago,
            'observacoes': self.observacoes
        }


class NotificacaoDano(db.Model):
    """
    Fila de e-mails de dano detectado (processada pelo job de notificações)
    """
    __tablename__ = 'notificacao_dano'

    id = db.Column(db.Integer, primary_key=True)
    dano_id = db.Column(db.Integer, db.ForeignKey('dano_inspecao.id'))
    custo_id = db.Column(db.Integer, db.ForeignKey('custo.id'))
    status = db.Column(db.String(20), default='pendente')  # 'pendente', 'enviada', 'falha'
    dados_json = db.Column(db.Text, nullable=False)
    mensagem_erro = db.Column(db.Text)
    enviada_em = db.Column(db.DateTime)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<NotificacaoDano {self.id} {self.status}>'

    def to_dict(self):
        return {
            'id': self.id,
            'dano_id': self.dano_id,
            'custo_id': self.custo_id,
            'status': self.status,
            'mensagem_erro': self.mensagem_erro,
            'enviada_em': _iso(self.enviada_em),
            'criado_em': _iso(self.criado_em)
        }


# ============================================================================
# MÓDULO 3: FINANCEIRO
# ============================================================================

class DespesaRecorrente(db.Model):
    """
    Modelo de despesa recorrente - gera uma conta a pagar por ciclo mensal
    """
    __tablename__ = 'despesa_recorrente'

    id = db.Column(db.Integer, primary_key=True)
    descricao = db.Column(db.String(200), nullable=False)
    valor = db.Column(db.Numeric(10, 2), nullable=False)
    dia_vencimento = db.Column(db.Integer, nullable=False)  # 1-31
    categoria = db.Column(db.String(30), nullable=False)
    ativo = db.Column(db.Boolean, default=True)
    ultima_geracao = db.Column(db.Date)
    forma_pagamento = db.Column(db.String(30))
    observacoes = db.Column(db.Text)
    funcionario_id = db.Column(db.Integer, db.ForeignKey('funcionario.id'))
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    contas = db.relationship('ContaPagar', back_populates='despesa_recorrente', lazy='dynamic')

    def __repr__(self):
        return f'<DespesaRecorrente {self.descricao} dia {self.dia_vencimento}>'

    def to_dict(self):
        return {
            'id': self.id,
            'descricao': self.descricao,
            'valor': float(self.valor),
            'dia_vencimento': self.dia_vencimento,
            'categoria': self.categoria,
            'ativo': self.ativo,
            'ultima_geracao': _iso(self.ultima_geracao),
            'forma_pagamento': self.forma_pagamento,
            'observacoes': self.observacoes,
            'funcionario_id': self.funcionario_id,
            'criado_em': _iso(self.criado_em),
            'atualizado_em': _iso(self.atualizado_em)
        }


class ContaPagar(db.Model):
    """
    Conta a pagar - uma obrigação datada (gerada por despesa recorrente,
    salário, custo sincronizado ou lançada manualmente)
    """
    __tablename__ = 'conta_pagar'

    id = db.Column(db.Integer, primary_key=True)
    descricao = db.Column(db.String(200), nullable=False)
    valor = db.Column(db.Numeric(10, 2), nullable=False)
    data_vencimento = db.Column(db.Date, nullable=False)
    data_pagamento = db.Column(db.Date)
    categoria = db.Column(db.String(30), nullable=False)
    status = db.Column(db.String(20), default='Pendente')  # 'Pendente', 'Autorizado', 'Pago'
    fornecedor = db.Column(db.String(150))
    documento_ref = db.Column(db.String(100))
    forma_pagamento = db.Column(db.String(30))
    origem_tipo = db.Column(db.String(30), default='Manual')  # 'Salário', 'Despesa Recorrente', 'Custo', 'Manual'

    # Custo que registra o pagamento desta conta
    custo_id = db.Column(db.Integer, db.ForeignKey('custo.id'))
    # Custo espelhado por esta conta quando veio de fonte automática
    referencia_origem_id = db.Column(db.Integer, db.ForeignKey('custo.id'))
    despesa_recorrente_id = db.Column(db.Integer, db.ForeignKey('despesa_recorrente.id'))
    salario_id = db.Column(db.Integer)  # sem FK: salario já aponta para a conta

    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    custo = db.relationship('Custo', foreign_keys=[custo_id])
    custo_origem = db.relationship('Custo', foreign_keys=[referencia_origem_id])
    despesa_recorrente = db.relationship('DespesaRecorrente', back_populates='contas')

    __table_args__ = (
        db.Index('idx_conta_pagar_vencimento', 'data_vencimento'),
        db.Index('idx_conta_pagar_status', 'status'),
        db.Index('idx_conta_pagar_recorrente', 'despesa_recorrente_id', 'data_vencimento'),
    )

    def dias_atraso(self, hoje=None):
        hoje = hoje or date.today()
        if self.status == 'Pago' or not self.data_vencimento:
            return 0
        return max((hoje - self.data_vencimento).days, 0)

    def __repr__(self):
        return f'<ContaPagar {self.descricao} R${self.valor} Venc:{self.data_vencimento}>'

    def to_dict(self, hoje=None):
        dias = self.dias_atraso(hoje)
        return {
            'id': self.id,
            'descricao': self.descricao,
            'valor': float(self.valor),
            'data_vencimento': _iso(self.data_vencimento),
            'data_pagamento': _iso(self.data_pagamento),
            'categoria': self.categoria,
            'status': self.status,
            'fornecedor': self.fornecedor,
            'documento_ref': self.documento_ref,
            'forma_pagamento': self.forma_pagamento,
            'origem_tipo': self.origem_tipo,
            'custo_id': self.custo_id,
            'referencia_origem_id': self.referencia_origem_id,
            'despesa_recorrente_id': self.despesa_recorrente_id,
            'salario_id': self.salario_id,
            'em_atraso': dias > 0,
            'dias_atraso': dias,
            'criado_em': _iso(self.criado_em)
        }


class Salario(db.Model):
    """
    Pagamento mensal de um funcionário
    """
    __tablename__ = 'salario'

    id = db.Column(db.Integer, primary_key=True)
    funcionario_id = db.Column(db.Integer, db.ForeignKey('funcionario.id'), nullable=False)
    valor = db.Column(db.Numeric(10, 2), nullable=False)
    data_pagamento = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), default='Pendente')
    mes_referencia = db.Column(db.Date, nullable=False)  # Primeiro dia do mês (YYYY-MM-01)
    custo_id = db.Column(db.Integer, db.ForeignKey('custo.id'))
    conta_pagar_id = db.Column(db.Integer, db.ForeignKey('conta_pagar.id'))
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    atualizado_em = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    funcionario = db.relationship('Funcionario', back_populates='salarios')
    custo = db.relationship('Custo')
    conta_pagar = db.relationship('ContaPagar', foreign_keys=[conta_pagar_id])

    __table_args__ = (
        db.Index('idx_salario_funcionario_mes', 'funcionario_id', 'mes_referencia'),
    )

    def __repr__(self):
        return f'<Salario F:{self.funcionario_id} {self.mes_referencia} R${self.valor}>'

    def to_dict(self):
        funcionario = self.funcionario
        return {
            'id': self.id,
            'funcionario_id': self.funcionario_id,
            'funcionario_nome': funcionario.nome if funcionario else None,
            'funcionario_cargo': funcionario.cargo if funcionario else None,
            'funcionario_codigo': funcionario.codigo if funcionario else None,
            'valor': float(self.valor),
            'data_pagamento': _iso(self.data_pagamento),
            'status': self.status,
            'mes_referencia': self.mes_referencia.strftime('%Y-%m-%d'),
            'mes_referencia_formatado': self.mes_referencia.strftime('%m/%Y'),
            'custo_id': self.custo_id,
            'conta_pagar_id': self.conta_pagar_id,
            'criado_em': _iso(self.criado_em),
            'atualizado_em': _iso(self.atualizado_em)
        }
