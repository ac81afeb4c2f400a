from flask import Blueprint, jsonify

from locadora.models import db
from locadora.routes.comum import erro_interno
from locadora.services import notificacao_service

notificacoes_bp = Blueprint('notificacoes', __name__)


@notificacoes_bp.route('/danos/enviar', methods=['POST'])
def enviar_notificacoes_danos():
    """Processa a fila de notificações de dano pendentes"""
    try:
        resultados = notificacao_service.processar_pendentes()
        db.session.commit()
        return jsonify({
            'success': True,
            'processadas': len(resultados),
            'data': resultados
        }), 200
    except Exception as e:
        return erro_interno(e)
