""" A minimal shell channel for a Jupyter kernel: answer kernel_info_request
    and echo back the code of every execute_request. The signing scheme and
    key are read from the connection file named on the command line, as a
    kernel launched by Jupyter would do.
"""

import jmp
import sys


class Shell:

    def __init__(self, connection_file, address='tcp://127.0.0.1'):

        scheme, key = jmp.config.load(connection_file)
        with open(connection_file, 'rb') as contents:
            port = jmp.json.loads(contents.read())['shell_port']

        self.execution_count = 0
        self.socket = jmp.Socket(jmp.zmq.ROUTER, scheme, key)
        self.socket.bind('%s:%d' % (address, port))
        self.socket.on('message', self.handle)


    def handle(self, request):

        msg_type = request.msg_type

        if msg_type == 'kernel_info_request':
            content = dict()
            content['status'] = 'ok'
            content['protocol_version'] = '5.3'
            content['implementation'] = 'echo'
            content['implementation_version'] = '0.1'
            content['language_info'] = {'name': 'echo', 'mimetype': 'text/plain', 'file_extension': '.txt'}
            content['banner'] = 'Echo'
            request.respond(self.socket, 'kernel_info_reply', content)

        elif msg_type == 'execute_request':
            self.execution_count += 1
            content = dict()
            content['status'] = 'ok'
            content['execution_count'] = self.execution_count
            content['user_expressions'] = {}
            content['echo'] = request.content.get('code', '')
            request.respond(self.socket, 'execute_reply', content)


    def run(self):
        while True:
            self.socket.poll()


if __name__ == '__main__':
    Shell(sys.argv[1]).run()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
