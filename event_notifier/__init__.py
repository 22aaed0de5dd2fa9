"""Watcher de eventos do Docker -> webhook de chat (Slack/Discord).

Este pacote contém:
- constants: variáveis de ambiente e templates por status
- utils: helpers de timestamp/formatação
- event_source: decodificação do stream de eventos do Docker
- filters: filtros por status e por nome do container
- cache/enrichment: docker inspect com cache por container id
- notifier: histerese (debounce) por container e envio
- formatters: montagem da mensagem e payloads Slack/Discord
- services: envio para o webhook
- docker_client: acesso ao Docker Engine
- pipeline/watcher: encadeamento dos estágios e loop principal
- controller: app Flask com endpoint de health
"""
