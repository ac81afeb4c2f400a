"""
Aplicação Flask - Gestão de Locadora (back-office financeiro da frota)

Este arquivo inicializa a aplicação Flask e configura rotas, banco de dados e middleware
"""
import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from locadora import eventos  # noqa: F401 registra listeners de sessão
from locadora.config import get_config
from locadora.models import db

# Carregar variáveis de ambiente
load_dotenv('.env.local')  # Para desenvolvimento

migrate = Migrate()


def create_app(config_name=None):
    """
    Factory para criar a aplicação Flask

    Args:
        config_name: Nome da configuração ('development', 'production', 'testing')

    Returns:
        app: Instância configurada do Flask
    """
    app = Flask(__name__)

    # Configuração baseada no ambiente
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app.config.from_object(get_config(config_name))
    configurar_logging(app)

    # Inicializar extensões
    db.init_app(app)
    CORS(app)
    migrate.init_app(app, db)

    # Registrar blueprints (rotas)
    register_blueprints(app)

    # Registrar handlers de erro
    register_error_handlers(app)

    @app.route('/health')
    def health():
        """Health check para monitoramento"""
        return jsonify({
            'status': 'ok',
            'environment': config_name,
            'database': 'connected'
        })

    if app.config.get('SCHEDULER_ENABLED'):
        from locadora.scheduler import start_scheduler
        start_scheduler(app)

    return app


def configurar_logging(app):
    nivel = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=nivel,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger('locadora').setLevel(nivel)


def register_blueprints(app):
    """
    Registra os blueprints (módulos de rotas)

    Args:
        app: Instância do Flask
    """
    # Importar blueprints aqui para evitar importação circular
    from locadora.routes.abastecimentos import abastecimentos_bp
    from locadora.routes.clientes import clientes_bp
    from locadora.routes.contas_pagar import contas_pagar_bp
    from locadora.routes.custos import custos_bp
    from locadora.routes.despesas_recorrentes import despesas_recorrentes_bp
    from locadora.routes.financeiro import financeiro_bp
    from locadora.routes.funcionarios import funcionarios_bp
    from locadora.routes.motoristas import motoristas_bp
    from locadora.routes.multas import multas_bp
    from locadora.routes.notificacoes import notificacoes_bp
    from locadora.routes.salarios import salarios_bp
    from locadora.routes.veiculos import veiculos_bp

    app.register_blueprint(contas_pagar_bp, url_prefix='/api/contas-pagar')
    app.register_blueprint(despesas_recorrentes_bp, url_prefix='/api/despesas-recorrentes')
    app.register_blueprint(salarios_bp, url_prefix='/api/salarios')
    app.register_blueprint(financeiro_bp, url_prefix='/api/financeiro')
    app.register_blueprint(custos_bp, url_prefix='/api/custos')
    app.register_blueprint(clientes_bp, url_prefix='/api/clientes')
    app.register_blueprint(motoristas_bp, url_prefix='/api/motoristas')
    app.register_blueprint(veiculos_bp, url_prefix='/api/veiculos')
    app.register_blueprint(notificacoes_bp, url_prefix='/api/notificacoes')
    app.register_blueprint(funcionarios_bp, url_prefix='/api/funcionarios')
    app.register_blueprint(multas_bp, url_prefix='/api/multas')
    app.register_blueprint(abastecimentos_bp, url_prefix='/api/abastecimentos')


def register_error_handlers(app):
    """
    Registra handlers para tratamento de erros

    Args:
        app: Instância do Flask
    """

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Recurso não encontrado'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'success': False, 'error': 'Erro interno do servidor'}), 500

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'success': False, 'error': 'Requisição inválida'}), 400


if __name__ == '__main__':
    app = create_app()

    # Criar tabelas se não existirem
    with app.app_context():
        db.create_all()
        print("=> Tabelas do banco de dados criadas/verificadas com sucesso!")
        print("=> Servidor iniciando em http://localhost:5000")

    app.run(host='0.0.0.0', port=5000, debug=app.config.get('DEBUG', False))
